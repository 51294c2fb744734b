"""Todolist CLI — talk to the to-do list API from a terminal.

Usage:
    todolist serve                                   # Run the API with uvicorn
    todolist register alice secret12                 # Create account, print token
    todolist login alice secret12                    # Print a fresh token
    export TODOLIST_TOKEN=<token>
    todolist lists                                   # Your lists
    todolist create-list "Groceries"                 # New list
    todolist subscribe <list-id> <user-id>           # Share a list
    todolist add-task <list-id> "Milk" "2 litres"    # New task
    todolist set-status <task-id> DONE               # Update a task
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

from todolist.db.models import TASK_STATUSES

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("TODOLIST_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Todolist backend."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _require_token(token: Optional[str]) -> str:
    if not token:
        click.secho(
            "Error: --token required (or set TODOLIST_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return token


def _check(r: httpx.Response):
    """Return the envelope payload, or print the API error and exit."""
    try:
        data = r.json()
    except ValueError:
        data = {"message": r.text}
    if r.is_success:
        return data.get("message")

    click.secho(f"Error {r.status_code}: {data.get('message', 'request failed')}", fg="red", err=True)
    for err in data.get("errors", []):
        click.secho(f"  {err.get('field')}: {err.get('message')}", fg="red", err=True)
    sys.exit(1)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "—"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


def _status_color(status: str) -> str:
    """Map task statuses to click colors."""
    colors = {
        "ACTIVE": "white",
        "IN_PROGRESS": "yellow",
        "DONE": "green",
        "CLOSED": "red",
    }
    return colors.get(status, "white")


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="todolist")
@click.option("--token", envvar="TODOLIST_TOKEN", help="Bearer token (or set TODOLIST_TOKEN)")
@click.pass_context
def main(ctx: click.Context, token: Optional[str]):
    """Todolist — shared to-do lists from the command line."""
    ctx.obj = {"token": token}


# ---------------------------------------------------------------------------
# todolist serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: TODOLIST_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: TODOLIST_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server with uvicorn."""
    import uvicorn

    from todolist.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "todolist.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# todolist register / login / me
# ---------------------------------------------------------------------------


@main.command()
@click.argument("login")
@click.argument("password")
def register(login: str, password: str):
    """Create an account and print its token."""
    _run(_auth_impl("/auth/register", login, password))


@main.command()
@click.argument("login")
@click.argument("password")
def login(login: str, password: str):
    """Sign in and print a fresh token."""
    _run(_auth_impl("/auth/login", login, password))


async def _auth_impl(path: str, login: str, password: str):
    async with _client() as c:
        r = await c.post(path, json={"login": login, "password": password})
        _check(r)
        data = r.json()
        click.secho(data["message"], fg="green")
        click.echo(f"User:  {data['user']['login']} ({data['user']['id']})")
        click.echo(f"Token: {data['token']}")


@main.command()
@click.pass_obj
def me(obj: dict):
    """Show the user the token belongs to."""
    _run(_me_impl(_require_token(obj["token"])))


async def _me_impl(token: str):
    async with _client(token) as c:
        user = _check(await c.get("/auth/me"))
        click.echo(f"{user['login']} ({user['id']})")


# ---------------------------------------------------------------------------
# todolist lists / show
# ---------------------------------------------------------------------------


@main.command()
@click.pass_obj
def lists(obj: dict):
    """List the lists you subscribe to."""
    _run(_lists_impl(_require_token(obj["token"])))


async def _lists_impl(token: str):
    async with _client(token) as c:
        rows = _check(await c.get("/list"))

        if not rows:
            click.echo("No lists found.")
            return

        click.secho(f"Lists ({len(rows)}):", bold=True)
        click.echo()
        _print_table(
            [
                {
                    "id": lst["id"],
                    "title": lst["title"],
                    "members": len(lst["subscribers"]),
                    "tasks": len(lst["tasks"]),
                }
                for lst in rows
            ],
            [
                ("ID", "id", 36),
                ("Members", "members", 7),
                ("Tasks", "tasks", 5),
                ("Title", "title", 40),
            ],
        )


@main.command()
@click.argument("list_id")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@click.pass_obj
def show(obj: dict, list_id: str, as_json: bool):
    """Show one list with its tasks."""
    _run(_show_impl(_require_token(obj["token"]), list_id, as_json))


async def _show_impl(token: str, list_id: str, as_json: bool):
    async with _client(token) as c:
        lst = _check(await c.get(f"/list/{list_id}"))

        if as_json:
            click.echo(_pretty_json(lst))
            return

        click.secho(f"{lst['title']} ({lst['id']})", bold=True)
        click.echo(f"Members: {len(lst['subscribers'])}")
        click.echo()
        if not lst["tasks"]:
            click.echo("No tasks.")
            return
        for t in lst["tasks"]:
            status_str = click.style(f"{t['status']:12s}", fg=_status_color(t["status"]))
            click.echo(f"  {t['id']}  {status_str}  {t['title']}  (due {t['deadline']})")


# ---------------------------------------------------------------------------
# todolist create-list / rename-list / delete-list / subscribe
# ---------------------------------------------------------------------------


@main.command("create-list")
@click.argument("title")
@click.pass_obj
def create_list(obj: dict, title: str):
    """Create a new list."""
    _run(_send(_require_token(obj["token"]), "POST", "/list", {"title": title}, "Created"))


@main.command("rename-list")
@click.argument("list_id")
@click.argument("title")
@click.pass_obj
def rename_list(obj: dict, list_id: str, title: str):
    """Rename a list you subscribe to."""
    body = {"id": list_id, "title": title}
    _run(_send(_require_token(obj["token"]), "PUT", "/list", body, "Renamed"))


@main.command("delete-list")
@click.argument("list_id")
@click.pass_obj
def delete_list(obj: dict, list_id: str):
    """Delete a list you subscribe to (and all its tasks)."""
    _run(_send(_require_token(obj["token"]), "DELETE", "/list", {"id": list_id}, "Deleted"))


@main.command()
@click.argument("list_id")
@click.argument("user_id")
@click.pass_obj
def subscribe(obj: dict, list_id: str, user_id: str):
    """Share a list with another user."""
    body = {"listId": list_id, "userId": user_id}
    _run(_send(_require_token(obj["token"]), "POST", "/list/subscribe", body, "Subscribed"))


async def _send(token: str, method: str, path: str, body: dict, verb: str):
    async with _client(token) as c:
        result = _check(await c.request(method, path, json=body))
        if isinstance(result, dict):
            click.secho(f"{verb}: {result.get('title')} ({result.get('id')})", fg="green")
        else:
            click.secho(str(result), fg="green")


# ---------------------------------------------------------------------------
# todolist add-task / set-status / delete-task
# ---------------------------------------------------------------------------


@main.command("add-task")
@click.argument("list_id")
@click.argument("title")
@click.argument("body")
@click.option("--status", "-s", type=click.Choice(TASK_STATUSES), default="ACTIVE")
@click.option("--deadline", "-d", help="ISO date/time in the future (default: +24h)")
@click.pass_obj
def add_task(obj: dict, list_id: str, title: str, body: str, status: str,
             deadline: Optional[str]):
    """Add a task to a list you subscribe to."""
    payload = {"listId": list_id, "title": title, "body": body, "status": status}
    if deadline:
        payload["deadline"] = deadline
    _run(_send(_require_token(obj["token"]), "POST", "/task", payload, "Added"))


@main.command("set-status")
@click.argument("task_id")
@click.argument("status", type=click.Choice(TASK_STATUSES))
@click.pass_obj
def set_status(obj: dict, task_id: str, status: str):
    """Change a task's status."""
    body = {"id": task_id, "status": status}
    _run(_send(_require_token(obj["token"]), "PUT", "/task", body, "Updated"))


@main.command("delete-task")
@click.argument("task_id")
@click.pass_obj
def delete_task(obj: dict, task_id: str):
    """Delete a task you created."""
    _run(_send(_require_token(obj["token"]), "DELETE", "/task", {"id": task_id}, "Deleted"))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
