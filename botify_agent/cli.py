import asyncio
import logging
from typing import Annotated, Any, Dict, List
from urllib.parse import parse_qs, urlparse

import typer
from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.prompt import Prompt
from rich.spinner import Spinner

from botify_agent.client.botify_agent import BotifyAgent

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer()
console = Console()


def load_agent(config: str) -> BotifyAgent:
    """Create the client, exiting with a readable message on bad config."""
    try:
        with console.status("[bold green]Initializing agent...", spinner="dots"):
            return BotifyAgent(config_path=config)
    except FileNotFoundError:
        console.print(f"[bold red]Error:[/bold red] Configuration file not found at '{config}'")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)


def parse_callback(value: str) -> Dict[str, str]:
    """Read ``code`` and ``state`` from a pasted redirect URL or bare code."""
    query = parse_qs(urlparse(value).query)
    if "code" not in query:
        return {"code": value.strip()}
    return {key: values[0] for key, values in query.items() if values}


async def agent_reply(
    agent: BotifyAgent, user_id: str, message: str, history: List[Dict[str, Any]]
) -> str:
    """Run one turn behind a spinner."""
    with Live(console=console, refresh_per_second=10, transient=True) as live:
        live.update(Spinner("dots", "Thinking..."))
        return await agent.process(user_id, message, history=history)


async def chat_loop(agent: BotifyAgent, user_id: str) -> None:
    history: List[Dict[str, Any]] = []
    while True:
        try:
            user_message = Prompt.ask("[bold green]You[/bold green]")
        except (KeyboardInterrupt, EOFError):
            console.print("\n[yellow]Exiting chat session.[/yellow]")
            break

        if user_message.lower() in ["exit", "quit"]:
            console.print("[yellow]Exiting chat session.[/yellow]")
            break
        if not user_message.strip():
            continue

        try:
            reply = await agent_reply(agent, user_id, user_message, history)
        except Exception as e:
            console.print(f"[bold red]Error during processing:[/bold red] {e}")
            continue

        console.print("[bright_blue]Botify:[/bright_blue]", Markdown(reply))
        history.append({"role": "user", "content": user_message})
        history.append({"role": "assistant", "content": reply})


@app.command()
def chat(
    user_id: Annotated[
        str, typer.Option(help="The user ID whose Spotify account is used.")
    ] = "cli_user",
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
):
    """
    Start an interactive chat session with Botify.
    Type 'exit' or 'quit' to end the session.
    """
    agent = load_agent(config)
    console.print("[green]Agent initialized. Start chatting![/green]")
    console.print("[dim]Type 'exit' or 'quit' to end.[/dim]")
    asyncio.run(chat_loop(agent, user_id))


@app.command()
def authorize(
    user_id: Annotated[
        str, typer.Option(help="The user ID to connect a Spotify account for.")
    ] = "cli_user",
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
):
    """
    Connect a Spotify account: open the printed URL, then paste the URL
    Spotify redirected to (or just the code).
    """
    agent = load_agent(config)
    url, auth_id = agent.create_authorization(user_id)
    console.print("Open this URL to connect Spotify:")
    console.print(url, soft_wrap=True)

    callback = parse_callback(Prompt.ask("[bold green]Redirect URL or code[/bold green]"))
    if callback.get("state", auth_id) != auth_id:
        console.print("[bold red]Error:[/bold red] The redirect belongs to another authorization.")
        raise typer.Exit(code=1)

    try:
        record = asyncio.run(agent.complete_authorization(auth_id, callback["code"]))
    except Exception as e:
        console.print(f"[bold red]Authorization failed:[/bold red] {e}")
        raise typer.Exit(code=1)
    console.print(f"[green]Spotify connected for user {record.user_id}.[/green]")


@app.command()
def forget(
    user_id: Annotated[
        str, typer.Option(help="The user ID whose chat history is deleted.")
    ] = "cli_user",
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
):
    """
    Delete the stored conversation history of a user.
    """
    agent = load_agent(config)
    asyncio.run(agent.delete_user_history(user_id))
    console.print(f"[green]History of user {user_id} deleted.[/green]")


if __name__ == "__main__":
    app()
