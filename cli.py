# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog.models import Product
from sdk.pystore import CatalogClient

console = Console()
c = CatalogClient(
    base_url=os.environ.get("CATALOG_URL", "http://127.0.0.1:3000"),
    api_key=os.environ.get("API_KEY"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def _cell(value: Any) -> str:
    return "-" if value is None else str(value)


def format_price(price: Any) -> str:
    if isinstance(price, (int, float)) and not isinstance(price, bool):
        return f"${price:.2f}"
    return _cell(price)


def products_table(products: List[Dict[str, Any]], title: str = "📦 Products Catalog") -> Table:
    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=36)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", width=9)
    table.add_column("Description", width=30)

    for raw in products:
        p = Product.model_validate(raw)
        table.add_row(
            p.id,
            _cell(p.name),
            format_price(p.price),
            _cell(p.category),
            "yes" if p.in_stock is True else "no" if p.in_stock is False else "-",
            _cell(p.description),
        )
    return table


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(products_table(products))


def show_page(page: Dict[str, Any]):
    show_products(page.get("data", []))
    console.print(f"[dim]page {page.get('page')} · limit {page.get('limit')} · {page.get('total')} matching[/dim]")


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Errors are shown in the
    status panel and turned into a None result.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def refresh_cache():
    global product_cache
    page = try_api(c.list_products, limit=1000) or {}
    product_cache = page.get("data", [])
    return product_cache


def get_product_completer():
    if not product_cache:
        refresh_cache()
    names = [str(p.get("name", "")) for p in product_cache]
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([n for n in (ids + names) if n], ignore_case=True)


def resolve_product_id(entry: str) -> str:
    # accept a product name as well as an id
    for p in product_cache:
        if entry == p.get("id"):
            return entry
    for p in product_cache:
        if entry == str(p.get("name", "")):
            return p["id"]
    return entry


# ---------------------------
# Input helpers
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("🛍️ Catalog", "[bold blue]Product catalog CLI[/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "" and default is None:
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_in_stock() -> Optional[bool]:
    raw = Prompt.ask("In stock?", choices=["y", "n", ""], default="")
    return {"y": True, "n": False}.get(raw)


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        console.print(show_status(status_message, not status_message.startswith("Error")))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "📦 List products", "4", "➕ Create product"),
            ("2", "🔍 Search products", "5", "✏️ Update product"),
            ("3", "ℹ️ Get product by ID", "6", "🗑️ Delete product"),
            ("", "", "q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = Prompt.ask("🏷️ Category (blank for all)", default="")
            page = Prompt.ask("Page", default="1")
            page_data = try_api(c.list_products, category=category or None, page=page,
                                success_msg="Products loaded successfully")
            if page_data:
                show_page(page_data)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            page_data = try_api(c.list_products, q=term, success_msg=f"Search for '{term}' completed")
            if page_data:
                show_page(page_data)

        elif choice == "3":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            name = prompt_with_autocomplete("Enter product name")
            price = ask_float("💰 Price", default=10.0)
            category = Prompt.ask("🏷️ Category", default="") or None
            description = Prompt.ask("📝 Description", default="") or None
            resp = try_api(
                c.create_product, name, price, description, category, ask_in_stock(),
                success_msg=f"Product '{name}' created successfully"
            )
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "5":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            changes: Dict[str, Any] = {}
            name = Prompt.ask("New name (blank to keep)", default="")
            if name:
                changes["name"] = name
            price = ask_float("New price (blank to keep)")
            if price is not None:
                changes["price"] = price
            category = Prompt.ask("New category (blank to keep)", default="")
            if category:
                changes["category"] = category
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **changes)
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "6":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    show_products([resp])
                    refresh_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye 👋[/bold green]", title="Goodbye"))
            sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
