"""
Terminal front end for the billboard service.

  billboard chat --location baltimore        # or --lat 39.29 --lon -76.61
  billboard admin --interval 30
"""
import argparse
import asyncio
import logging

from rich.console import Console
from rich.table import Table

from billboard.client.admin import AdminViewer, format_timestamp
from billboard.client.api import DEFAULT_BASE_URL, BillboardApiClient
from billboard.client.session import SessionController, SessionState
from billboard.core.constants import ADMIN_REFRESH_INTERVAL_SECONDS
from billboard.models.chat_message import ChatMessage, Role

console = Console()


def _print_message(message: ChatMessage) -> None:
    who = "[bold cyan]you[/]" if message.role is Role.USER else "[bold green]billboard[/]"
    console.print(f"{who} [dim]{message.created_at.astimezone():%H:%M}[/]  {message.content}")


def render_admin_table(viewer: AdminViewer) -> Table:
    table = Table(title=f"Interactions: {viewer.total}  source: {viewer.source}")
    for col in ("ID", "Name", "Preference", "Location", "Timestamp"):
        table.add_column(col)
    for item in viewer.records:
        table.add_row(
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("food", "")),
            str(item.get("location", "")),
            format_timestamp(str(item.get("timestamp", ""))),
        )
    return table


async def _chat(args: argparse.Namespace) -> None:
    api = BillboardApiClient(args.base_url)
    geolocate = None
    if args.lat is not None and args.lon is not None:
        async def geolocate():
            return args.lat, args.lon

    session = SessionController(api, location_key=args.location, geolocate=geolocate, on_message=_print_message)
    runner = asyncio.create_task(session.run_forever())
    session.mount()
    try:
        while True:
            line = await asyncio.to_thread(input, "")
            if line.strip() in ("/quit", "/exit"):
                break
            if session.state is SessionState.LOCATION_ERROR:
                console.print(f"[red]{session.error}[/]")
                break
            session.submit(line)
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        runner.cancel()
        await api.aclose()


async def _admin(args: argparse.Namespace) -> None:
    api = BillboardApiClient(args.base_url)

    def show(viewer: AdminViewer) -> None:
        if viewer.error:
            console.print(f"[red]{viewer.error}[/]")
        elif not viewer.records:
            console.print("No interaction data found. Try using the digital assistant first!")
        else:
            console.print(render_admin_table(viewer))
        if viewer.last_updated:
            console.print(f"[dim]Last updated {viewer.last_updated:%H:%M:%S}[/]")

    viewer = AdminViewer(api, interval=args.interval, on_refresh=show)
    try:
        if args.once:
            await viewer.refresh()
            show(viewer)
        else:
            await viewer.poll()
    finally:
        await api.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="billboard", description="Smart billboard terminal client")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    chat = sub.add_parser("chat", help="Talk to the billboard")
    chat.add_argument("--location", help="Named location key (nyc, sf, baltimore)")
    chat.add_argument("--lat", type=float)
    chat.add_argument("--lon", type=float)

    admin = sub.add_parser("admin", help="List stored food preferences")
    admin.add_argument("--interval", type=float, default=ADMIN_REFRESH_INTERVAL_SECONDS)
    admin.add_argument("--once", action="store_true", help="Fetch once and exit")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    try:
        asyncio.run(_chat(args) if args.command == "chat" else _admin(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
