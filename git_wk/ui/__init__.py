"""Interactive UI components for git-wk."""
