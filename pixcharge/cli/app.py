from __future__ import annotations

import asyncio
from pathlib import Path

import questionary
from rich.console import Console
from rich.table import Table

from pixcharge.constants import SERVER_VERSION
from pixcharge.errors import PixError
from pixcharge.models import parse_brl
from pixcharge.models.charge import ChargeRequest, HealthStatus, StaticPixResult
from pixcharge.render import render_qrcode_png
from pixcharge.services.static_pix_service import StaticPixService
from pixcharge.settings import settings

console = Console()


def _ask_request() -> ChargeRequest | None:
    payment_key = questionary.text("Chave PIX:").ask()
    if not payment_key:
        console.print("[yellow]Operação cancelada.[/yellow]")
        return None

    while True:
        amount_str = questionary.text("Valor (ex: 150,50):").ask()
        if amount_str is None:
            console.print("[yellow]Operação cancelada.[/yellow]")
            return None
        amount = parse_brl(amount_str)
        if amount is not None and amount > 0:
            break
        console.print("[red]Valor inválido. Tente novamente.[/red]")

    recipient_name = questionary.text("Nome do recebedor:").ask()
    recipient_city = questionary.text("Cidade do recebedor:").ask()
    if not recipient_name or not recipient_city:
        console.print("[yellow]Operação cancelada.[/yellow]")
        return None

    description = questionary.text("Descrição (opcional):").ask() or None

    return ChargeRequest(
        payment_key=payment_key.strip(),
        amount=amount,
        recipient_name=recipient_name,
        recipient_city=recipient_city,
        description=description,
    )


def _print_result(result: StaticPixResult) -> None:
    details = result.details
    table = Table(title="Pix Estático", show_header=False)
    table.add_column("Campo", style="cyan")
    table.add_column("Valor")
    table.add_row("Chave", details.payment_key)
    table.add_row("Valor", details.amount_formatted)
    table.add_row("Recebedor", details.recipient)
    table.add_row("Cidade", details.city)
    table.add_row("Descrição", details.description or "-")
    console.print(table)
    console.print()
    console.print("[bold]Pix Copia e Cola:[/bold]")
    console.print(result.payload_text, soft_wrap=True)


def generate_static_menu(service: StaticPixService) -> None:
    console.print()
    console.print("[bold]Novo Pix Estático[/bold]", style="cyan")

    request = _ask_request()
    if request is None:
        return

    try:
        result = asyncio.run(service.create_static_pix(request))
    except PixError as exc:
        console.print(f"[red]Erro: {exc}[/red]")
        return

    _print_result(result)

    if questionary.confirm("Salvar QR Code em PNG?", default=False).ask():
        path = questionary.text("Arquivo:", default="pix.png").ask()
        if path:
            png = render_qrcode_png(result.payload_text, box_size=settings.qr_box_size, border=settings.qr_border)
            Path(path).write_bytes(png)
            console.print(f"[green]QR Code salvo em {path}[/green]")


def health_menu() -> None:
    # Settings only: no provider clients are opened
    status = HealthStatus(
        version=SERVER_VERSION,
        mode="cli",
        environment=settings.environment,
        providers=settings.provider_names,
    )
    console.print()
    console.print(f"[bold]Status:[/bold] {status.server}")
    console.print(f"[bold]Versão:[/bold] {status.version}")
    console.print(f"[bold]Ambiente:[/bold] {status.environment}")
    console.print(f"[bold]Provedores:[/bold] {', '.join(status.providers)}")


def main_menu() -> None:
    service = StaticPixService()

    console.print()
    console.print("[bold]Gerador de Pix[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Menu Principal",
            choices=[
                "Gerar Pix Estático",
                "Status do Servidor",
                "Sair",
            ],
        ).ask()

        if choice is None or choice == "Sair":
            console.print("[bold]Até logo![/bold]")
            break
        elif choice == "Gerar Pix Estático":
            generate_static_menu(service)
        elif choice == "Status do Servidor":
            health_menu()
