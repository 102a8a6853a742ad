"""Help screen for vestcli."""

from textual.app import ComposeResult
from textual.screen import Screen

from ..widgets import ALLOW_IN_FULL_SCREEN, LinkableMarkdownViewer


class HelpScreen(Screen):
    """A modal help screen."""

    def compose(self) -> ComposeResult:
        """Define the content layout of the help screen."""
        yield LinkableMarkdownViewer(
            markdown="""# Help for vestcli
## Feed
- **j / k / arrow keys / mouse wheel**: Select next or previous article
- **page down / page up**: Move one screen
- **enter / left click on selected article**: Open article
- **left click**: Select article
- **gg**: Go to the newest article
- **r**: Refresh feed
- **q / right click**: Quit

New articles are shown in blue and opened ones are dimmed. Scrolling past the
last article loads older ones.

## Article
- **j / k / arrow keys**: Scroll one line
- **mouse wheel**: Scroll three lines
- **space / page down / page up**: Scroll one screen
- **gg**: Go to the start of the article
- **q / backspace / escape / right click**: Back to the feed

## General keys
- **?**: Show this help
- **v**: Show version

## Sites

- [N1](https://n1info.rs/)
- [Danas](https://www.danas.rs/)
- [Insajder](https://insajder.com/)

The sites are not affiliated with this project.
""",
            id="fullscreen-content",
            show_table_of_contents=False,
            open_links=False,
        )

    def on_key(self, event) -> None:
        """Close the help screen on any key press except navigation keys."""
        event.prevent_default()
        if event.key in ALLOW_IN_FULL_SCREEN:
            pass
        else:
            self.app.pop_screen()
