"""
suideploy - UI Components
Standardized headers and UI elements
"""

from typing import Optional

from rich.console import Console

LOGO = "suideploy"

BRAND_COLOR = "cyan"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    network: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Deploy Package", "Upgrade Package")
        subtitle: Optional subtitle line
        network: Target network (if known)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy Package",
            network="testnet",
            details={"Project": "/work/counter"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if network:
        console.print(f"{prefix} Network: [{BRAND_COLOR}]{network}[/{BRAND_COLOR}]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{value}[/{BRAND_COLOR}]")

    console.print()
