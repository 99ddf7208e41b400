import importlib
import json
import sys
import pydantic
import typer
from typing import List

from .config import load_config
from .db import Database
from .exceptions import CollectionNotFound, FixtureError

app = typer.Typer()


def _load_database(dotted_path: str) -> Database:
    sys.path.append(".")
    try:
        path, name = dotted_path.rsplit(".", 1)
        mod = importlib.import_module(path)
        db = getattr(mod, name)
    except (ValueError, ImportError, AttributeError) as e:
        raise FixtureError(f"could not load {dotted_path}: {e}") from e
    if not isinstance(db, Database):
        raise FixtureError(f"{dotted_path} is not a Database")
    return db


def _collection(ctx: typer.Context, name: str):
    try:
        return ctx.obj[name]
    except CollectionNotFound as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


@app.callback()
def main(
    ctx: typer.Context,
    database: str = typer.Option(None, envvar="MOCKTABLES_DATABASE_PATH"),
    log_level: str = typer.Option("warning"),
) -> None:
    try:
        config = load_config(log_level=log_level)
    except pydantic.ValidationError:
        typer.secho(
            "Invalid logging settings; check --log-level and env[MOCKTABLES_*]",
            fg=typer.colors.RED,
        )
        raise typer.Exit(1)
    database = database or config.database_path
    if not database:
        typer.secho(
            "Missing database; pass --database or set env[MOCKTABLES_DATABASE_PATH]",
            fg=typer.colors.RED,
        )
        raise typer.Exit(1)
    try:
        ctx.obj = _load_database(database)
    except FixtureError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def show(ctx: typer.Context) -> None:
    summary = ctx.obj.summary()
    if not summary:
        typer.secho("No collections", fg=typer.colors.YELLOW)
    for item in summary:
        typer.secho(str(item), fg=typer.colors.GREEN if item.count else None)


@app.command("all")
def all_(ctx: typer.Context, name: str) -> None:
    _echo_json(_collection(ctx, name).all())


@app.command()
def find(ctx: typer.Context, name: str, ids: List[str]) -> None:
    collection = _collection(ctx, name)
    result = collection.find(ids[0] if len(ids) == 1 else ids)
    _echo_json(result)
    if not result:
        raise typer.Exit(1)


@app.command()
def where(ctx: typer.Context, name: str, conditions: List[str]) -> None:
    collection = _collection(ctx, name)
    query = {}
    for condition in conditions:
        key, sep, value = condition.partition("=")
        if not sep or not key:
            typer.secho(f"Bad condition {condition}; use key=value", fg=typer.colors.RED)
            raise typer.Exit(1)
        query[key] = value
    _echo_json(collection.where(query))


if __name__ == "__main__":
    app()
