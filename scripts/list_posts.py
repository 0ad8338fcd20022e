#!/usr/bin/env python3
"""
Command-line interface for browsing the post index.

Commands:
    list       - List posts by date (optionally filter by tag/category)
    tags       - Show tags with post counts
    categories - Show categories with post counts

Posts whose front matter cannot be parsed are skipped (run lint_posts.py to see why).
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from postlint.contexts.ingest.exceptions import PostsDirectoryError
from postlint.contexts.ingest.logger import setup_ingest_logger
from postlint.contexts.ingest.post_index import PostIndex
from postlint.utils.table_formatter import Column, TableFormatter

load_dotenv()
POSTS_PATH = Path(os.getenv("POSTS_PATH", "_posts"))

app = typer.Typer(
    add_completion=False,
    help="Browse blog posts by date, tag and category",
    invoke_without_command=True,
)

PostsDirArgument = typer.Option(
    None, "--posts-dir", "-d", help="Directory containing posts (default: $POSTS_PATH or _posts)"
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_index(posts_dir: Optional[Path]) -> PostIndex:
    posts_dir = posts_dir or POSTS_PATH
    setup_ingest_logger(posts_dir=posts_dir)
    try:
        return PostIndex.from_directory(posts_dir)
    except PostsDirectoryError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(2)


@app.command("list")
def list_command(
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only posts with this tag"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only posts in this category"),
    posts_dir: Optional[Path] = PostsDirArgument,
):
    """
    List posts in date order.

    Examples:\n

        $ list_posts.py list --tag wordpress

        $ list_posts.py list --category ruby -d content/_posts
    """
    index = _load_index(posts_dir)
    posts = index.filter(tag=tag, category=category)

    if not posts:
        typer.secho("No matching posts", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    table = TableFormatter(
        [
            Column("Date", 10),
            Column("Title", 50),
            Column("Tags", 40),
        ]
    )
    table.add_table_header()
    for post in posts:
        post_date = post.date.isoformat() if post.date else "-"
        table.add_row([post_date, post.title or post.name, ", ".join(post.tags)])
    table.add_summary(f"{len(posts)} post(s)")
    typer.echo(table.render())


def _echo_counts(counts, heading: str, label: str) -> None:
    if not counts:
        typer.secho(f"No {label} found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    table = TableFormatter([Column(heading, 30), Column("Posts", 5, ">")])
    table.add_table_header()
    # Most used first, ties alphabetically
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row([name, count])
    table.add_summary(f"{len(counts)} {label}")
    typer.echo(table.render())


@app.command("tags")
def tags_command(posts_dir: Optional[Path] = PostsDirArgument):
    """Show every tag with the number of posts carrying it."""
    index = _load_index(posts_dir)
    _echo_counts(index.tag_counts(), "Tag", "tags")


@app.command("categories")
def categories_command(posts_dir: Optional[Path] = PostsDirArgument):
    """Show every category with the number of posts filed under it."""
    index = _load_index(posts_dir)
    _echo_counts(index.category_counts(), "Category", "categories")


if __name__ == "__main__":
    app()
