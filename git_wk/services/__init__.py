"""Services for git-wk."""
