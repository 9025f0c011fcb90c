import logging
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.box import ROUNDED, HEAVY, SIMPLE
from rich.text import Text
from rich.table import Table

from shopgen.domain.interfaces.user_interface import UserInterface
from shopgen.domain.models.product import Product

logger = logging.getLogger(__name__)

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self.console = console or Console()

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays plain output inside a rounded panel.

        Args:
            output: The text to display.
            **kwargs: Additional arguments including:
                - title: Panel title (default: "Output")
        """
        title = kwargs.get("title", "Output")
        panel = Panel(
            Text(str(output)),
            title=f"[bold cyan]{title}[/bold cyan]",
            border_style="cyan",
            box=ROUNDED,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
            **kwargs: Optional status_code shown in the panel title.
        """
        status_code = kwargs.get("status_code")
        title = f"Error {status_code}" if status_code else "Error"
        panel = Panel(
            Text(error_message, style="white"),
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message with enhanced styling.

        Args:
            info_message: The informational message to display.
        """
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message with enhanced styling.

        Args:
            warning_message: The warning message to display.
        """
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def get_prompt(self, prompt_message: str = "> ") -> str:
        """Gets a line of input from the user with a styled prompt."""
        return self.console.input(f"[bold green]{prompt_message}[/bold green]")

    def _key_value_table(self, title: str, rows: Dict[str, Any]) -> Table:
        table = Table(title=title, show_header=False, box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("Field", style="bold cyan")
        table.add_column("Value")
        for field, value in rows.items():
            table.add_row(field, "-" if value is None else str(value))
        return table

    def display_image_result(self, response: Dict[str, Any]) -> None:
        """Displays a generated image URL with its generation metadata."""
        metadata = response.get("metadata", {})
        source = "cache" if metadata.get("from_cache") else f"API ({metadata.get('attempts')} attempt(s))"
        rows = {
            "Product": response.get("product_id"),
            "Image URL": response.get("image_url"),
            "Prompt": response.get("prompt"),
            "Revised prompt": response.get("revised_prompt"),
            "Served from": source,
            "Model": metadata.get("model"),
            "Size": metadata.get("size"),
            "Quality": metadata.get("quality"),
            "Style": metadata.get("style"),
        }
        self.console.print(self._key_value_table(response.get("message", "Image generated"), rows))

    def display_cache_stats(self, stats: Dict[str, Any]) -> None:
        rows = {
            "Entries": stats.get("cache_size", stats.get("keys")),
            "Hits": stats.get("hits"),
            "Misses": stats.get("misses"),
            "Hit rate": f"{stats.get('hit_rate_percentage', 0)}%",
        }
        self.console.print(self._key_value_table("Cache statistics", rows))

    def display_service_status(self, status: Dict[str, Any]) -> None:
        cache_info = status.get("cache_info", {})
        rows = {
            "Service": status.get("service"),
            "API key": status.get("api_key_prefix"),
            "Working": "yes" if status.get("is_working") else "no",
            "Cached images": cache_info.get("size"),
            "Cache hit rate": cache_info.get("hit_rate"),
            "Cache lookups": cache_info.get("total_requests"),
            "Features": ", ".join(status.get("features", [])),
        }
        self.console.print(self._key_value_table(status.get("message", "Service status"), rows))

    def display_products(self, products: List[Product]) -> None:
        if not products:
            self.display_info("The product catalog is empty.")
            return
        table = Table(title="Products", show_header=True, box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("ID", style="bold")
        table.add_column("Name", style="cyan")
        table.add_column("Category")
        table.add_column("Price", justify="right")
        for product in products:
            table.add_row(product.id, product.name, product.category or "-", f"{product.price:.2f}")
        self.console.print(table)
