# cli.py: interactive storefront menu with autocomplete
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.client import StoreClient

console = Console()
c = StoreClient()

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
cart_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Code", width=10)
    table.add_column("Title", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)
    table.add_column("Active", width=7)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("code", "N/A"),
            p.get("title", "N/A"),
            f"${float(p.get('price', 0)):.2f}",
            str(p.get("stock", 0)),
            p.get("category", "N/A"),
            "yes" if p.get("status") else "no",
        )
    console.print(table)


def show_cart(cart: Optional[Dict[str, Any]]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Cart ", style="bold")
    title.append(f"#{cart.get('id', '?')}", style="bold cyan")

    items = cart.get("products", [])
    if not items:
        console.print(Panel("This cart is empty 🛍️", title=title, style="blue"))
        return

    known = {p.get("id"): p for p in product_cache}
    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    for it in items:
        prod = known.get(it.get("product"))
        name = prod.get("title", "Unknown") if prod else f"Product {it.get('product')}"
        table.add_row(name, str(it.get("quantity", 0)))

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_text(e: Exception) -> str:
    # prefer the envelope message the API sends back
    response = getattr(e, "response", None)
    if response is not None:
        try:
            return response.json().get("message", str(e))
        except ValueError:
            pass
    return str(e)


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Returns its result, or None on failure.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def get_cart_completer():
    return WordCompleter(sorted(cart_cache), ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Products & Carts CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, not status_message.startswith("Error")))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🆕 Create cart"),
            ("2", "ℹ️ Get product by ID", "6", "🛒 View cart"),
            ("3", "➕ Create product", "7", "➕ Add product to cart"),
            ("4", "🗑️ Delete product", "8", "✏️ Update product"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            limit = IntPrompt.ask("How many (0 = all)", default=0)
            products = try_api(c.list_products, limit or None, success_msg="Products loaded")
            if products is not None:
                if not limit:
                    product_cache = products
                show_products(products)

        elif choice == "2":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice == "3":
            title = prompt_with_autocomplete("Title")
            description = prompt_with_autocomplete("Description")
            code = prompt_with_autocomplete("Code")
            price = ask_float("💰 Price", default=10.0)
            stock = IntPrompt.ask("📦 Stock", default=1)
            category = prompt_with_autocomplete("🏷️ Category", default="general")
            active = Confirm.ask("Active?", default=True)
            resp = try_api(
                c.create_product, title, description, code, price, stock, category, status=active,
                success_msg=f"Product '{title}' created"
            )
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                product_cache = try_api(c.list_products) or []

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = try_api(c.list_products) or []

        elif choice == "5":
            cart = try_api(c.create_cart, success_msg="Cart created")
            if cart:
                cart_cache.add(str(cart["id"]))
                show_cart(cart)

        elif choice == "6":
            cid = prompt_with_autocomplete("Enter cart ID", completer=get_cart_completer())
            cart = try_api(c.get_cart, cid, success_msg=f"Cart {cid} loaded")
            if cart:
                cart_cache.add(str(cart["id"]))
                show_cart(cart)

        elif choice == "7":
            cid = prompt_with_autocomplete("Enter cart ID", completer=get_cart_completer())
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.add_product_to_cart, cid, pid, success_msg=f"Added product {pid} to cart {cid}")
            if resp:
                show_cart(resp[0])

        elif choice == "8":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            title = prompt_with_autocomplete("New title (blank to keep)")
            price = Prompt.ask("New price (blank to keep)", default="")
            stock = Prompt.ask("New stock (blank to keep)", default="")
            fields: Dict[str, Any] = {}
            if title:
                fields["title"] = title
            try:
                if price:
                    fields["price"] = float(price)
                if stock:
                    fields["stock"] = int(stock)
            except ValueError:
                console.print("[red]Price and stock must be numbers.[/red]")
                continue
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
            if resp:
                show_products(resp)
                product_cache = try_api(c.list_products) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
