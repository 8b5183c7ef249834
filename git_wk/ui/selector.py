"""Interactive branch and worktree selection using Textual."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from rich.console import Console
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, OptionList
from textual.widgets.option_list import Option

from git_wk.constants import CREATE_BRANCH_DESCRIPTION, CREATE_BRANCH_LABEL
from git_wk.exceptions import NotFoundError, SelectionCancelled, WkError
from git_wk.formatters import format_branch_description
from git_wk.models.branch import BranchRecord
from git_wk.models.worktree import WorktreeRecord
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SelectorItem:
    """One selectable entry."""

    value: str
    title: str
    description: str = ""
    is_create: bool = False


def build_branch_items(
    branches: Iterable[BranchRecord],
    exclude: Optional[Set[str]] = None,
    allow_create: bool = True,
) -> List[SelectorItem]:
    """Selector entries for branches, skipping names in exclude."""
    items: List[SelectorItem] = []
    if allow_create:
        items.append(SelectorItem(
            value="",
            title=CREATE_BRANCH_LABEL,
            description=CREATE_BRANCH_DESCRIPTION,
            is_create=True,
        ))

    exclude = exclude or set()
    for branch in branches:
        if branch.name in exclude:
            continue
        items.append(SelectorItem(
            value=branch.name,
            title=branch.name,
            description=format_branch_description(branch),
        ))
    return items


def build_worktree_items(worktrees: Iterable[WorktreeRecord]) -> List[SelectorItem]:
    """Selector entries for worktrees, keyed by path."""
    return [
        SelectorItem(value=wt.path, title=wt.branch or "?", description=wt.path)
        for wt in worktrees
    ]


def filter_items(items: List[SelectorItem], query: str) -> List[SelectorItem]:
    """Case-insensitive substring filter; the create entry always stays."""
    query = query.strip().lower()
    if not query:
        return list(items)
    return [item for item in items if item.is_create or query in item.title.lower()]


class SelectorApp(App[Optional[SelectorItem]]):
    """Full-screen filterable list that returns the chosen item."""

    CSS = """
    Screen {
        background: $surface;
    }

    #filter {
        dock: top;
        margin: 0 1;
    }

    OptionList {
        height: 1fr;
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
    ]

    def __init__(self, title: str, items: List[SelectorItem]):
        super().__init__()
        self.title = title
        self.items = items
        self.visible_items: List[SelectorItem] = list(items)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False, icon="")
        yield Input(placeholder="Type to filter...", id="filter")
        yield OptionList(id="choices")
        yield Footer()

    def on_mount(self) -> None:
        self._populate("")
        self.query_one(Input).focus()

    def _populate(self, query: str) -> None:
        """Refill the option list with items matching query."""
        self.visible_items = filter_items(self.items, query)
        option_list = self.query_one(OptionList)
        option_list.clear_options()
        option_list.add_options(
            Option(self._render_item(item)) for item in self.visible_items
        )
        if self.visible_items:
            option_list.highlighted = 0

    @staticmethod
    def _render_item(item: SelectorItem) -> Text:
        title_style = "green" if item.is_create else "bold"
        text = Text(item.title, style=title_style)
        if item.description:
            text.append("\n    ")
            text.append(item.description, style="dim")
        return text

    def on_input_changed(self, event: Input.Changed) -> None:
        self._populate(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        highlighted = self.query_one(OptionList).highlighted
        if highlighted is not None and highlighted < len(self.visible_items):
            self.exit(self.visible_items[highlighted])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(self.visible_items[event.option_index])

    def action_cursor_up(self) -> None:
        self.query_one(OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one(OptionList).action_cursor_down()

    def action_cancel(self) -> None:
        self.exit(None)


def run_selector(title: str, items: List[SelectorItem]) -> SelectorItem:
    """Show the selector and return the chosen item.

    Raises:
        SelectionCancelled: if the user leaves without choosing
    """
    choice = SelectorApp(title, items).run()
    if choice is None:
        raise SelectionCancelled()
    logger.debug(f"Selected {choice.title}")
    return choice


def select_or_create(
    branches: List[BranchRecord],
    exclude: Optional[Set[str]] = None,
    allow_create: bool = True,
) -> Tuple[str, bool]:
    """Pick a branch, or the create entry.

    Returns:
        Tuple of (branch_name, is_new). branch_name is empty when is_new is True.
    """
    items = build_branch_items(branches, exclude, allow_create)
    if not items:
        raise NotFoundError("no branches available")

    choice = run_selector("Select branch", items)
    return choice.value, choice.is_create


def select_worktree(worktrees: List[WorktreeRecord]) -> str:
    """Pick a worktree and return its path."""
    if not worktrees:
        raise NotFoundError("no worktrees found")
    return run_selector("Select worktree", build_worktree_items(worktrees)).value


def prompt_for_branch_name(console: Console) -> str:
    """Ask for the name of a new branch."""
    name = console.input("Enter new branch name: ").strip()
    if not name:
        raise WkError("branch name cannot be empty")
    return name
