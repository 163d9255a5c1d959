"""Reddit commands for redditread.

Read-only access to Reddit via public .json endpoints.
No authentication or API keys required.
"""

import shlex
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import click
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..utils.config import get_reddit_client
from ..utils.exceptions import InvalidArgumentError, RedditError, RequestError
from ..utils.options import ListingOptions, SearchOptions, SortMode, TimeFilter
from ..utils.output import console, handle_output, resolve_pretty


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_number(n: int | None) -> str:
    """Format a number for display (1.2K, 3.4M, etc.)."""
    if n is None:
        return "0"
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return f"{n:,}"


def format_timestamp(utc: float | int | None, now: Optional[datetime] = None) -> str:
    """Convert Unix timestamp to human-readable relative time."""
    if utc is None:
        return "unknown"

    now = now or datetime.now(timezone.utc)
    dt = datetime.fromtimestamp(utc, tz=timezone.utc)
    seconds = int((now - dt).total_seconds())

    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    months = days // 30
    if months < 12:
        return f"{months}mo ago"
    return f"{days // 365}y ago"


def _truncate(text: str | None, length: int = 80) -> str:
    """Truncate text to length."""
    if not text:
        return ""
    value = text.replace("\n", " ").strip()
    if len(value) <= length:
        return value
    return value[: length - 3] + "..."


def _absolute_reddit_url(path_or_url: str | None) -> str:
    """Convert Reddit path to absolute URL if needed."""
    if not path_or_url:
        return ""
    if path_or_url.startswith("http://") or path_or_url.startswith("https://"):
        return path_or_url
    if not path_or_url.startswith("/"):
        path_or_url = "/" + path_or_url
    return f"https://www.reddit.com{path_or_url}"


def _normalize_subreddit(name: str) -> str:
    """Normalize subreddit input to bare name."""
    value = name.strip().strip("/")
    if value.lower().startswith("r/"):
        value = value[2:]
    if not value:
        raise click.BadParameter("subreddit cannot be empty")
    return value


def _fetch(progress_label: str, call: Callable[[], Any]) -> Any:
    """Run a client call behind a spinner, reporting client errors."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(progress_label, total=None)
        try:
            return call()
        except InvalidArgumentError as exc:
            raise click.BadParameter(str(exc))
        except RequestError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            if exc.details:
                console.print(f"[dim]{escape(str(exc.details))}[/dim]")
            raise click.Abort()
        except RedditError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            raise click.Abort()


def _print_next_after_hint(command: str, next_after: str, pretty: bool):
    """Print pagination continuation hint."""
    hint = f"Next page: {command} --after {next_after}"
    if pretty:
        console.print(f"[dim]{hint}[/dim]")
    else:
        print(hint)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def display_post_table(posts: list[dict]):
    """Display a list of posts as a Rich table."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim", max_width=4)
    table.add_column("Author", style="blue", max_width=18)
    table.add_column("Score", justify="right", style="green", max_width=7)
    table.add_column("Cmt", justify="right", style="yellow", max_width=6)
    table.add_column("Age", style="dim", max_width=8)
    table.add_column("Title")

    for idx, post in enumerate(posts, 1):
        data = post.get("data", post)
        title = _truncate(data.get("title", ""), 74)
        flair = data.get("link_flair_text")
        if flair:
            title = f"[{flair}] {title}"

        permalink = _absolute_reddit_url(data.get("permalink", ""))
        title_cell = escape(title)
        if permalink:
            title_cell = f"[link={permalink}]{title_cell}[/link]"

        table.add_row(
            str(idx),
            f"u/{data.get('author', '[deleted]')}",
            format_number(data.get("score", 0)),
            format_number(data.get("num_comments", 0)),
            format_timestamp(data.get("created_utc")),
            title_cell,
        )

    console.print(table)


def display_post_lines(posts: list[dict]):
    """Display a list of posts as plain text lines."""
    for idx, post in enumerate(posts, 1):
        data = post.get("data", post)
        author = data.get("author", "[deleted]")
        score = format_number(data.get("score", 0))
        comments = format_number(data.get("num_comments", 0))
        age = format_timestamp(data.get("created_utc"))
        permalink = _absolute_reddit_url(data.get("permalink", ""))

        print(f"{idx}. {data.get('title', '')}")
        print(f"   r/{data.get('subreddit', '')} | u/{author} | {score} pts | {comments} comments | {age}")
        if permalink:
            print(f"   {permalink}")


def display_post(post_data: dict, pretty: bool = True):
    """Display a single post."""
    data = post_data.get("data", post_data)

    title = data.get("title", "")
    author = data.get("author", "[deleted]")
    subreddit = data.get("subreddit", "")
    score = format_number(data.get("score", 0))
    comments_count = format_number(data.get("num_comments", 0))
    age = format_timestamp(data.get("created_utc"))
    selftext = data.get("selftext", "")
    permalink_url = _absolute_reddit_url(data.get("permalink", ""))

    if pretty:
        console.print("=" * 70)
        console.print(f"[bold]{escape(title)}[/bold]")
        console.print(
            f"[cyan]r/{subreddit}[/cyan] | "
            f"[dim]u/{author}[/dim] | "
            f"[green]{score} pts[/green] | "
            f"[yellow]{comments_count} comments[/yellow] | "
            f"[dim]{age}[/dim]"
        )
        if permalink_url:
            console.print(f"[dim]{permalink_url}[/dim]")
        if selftext:
            console.print()
            console.print(escape(selftext))
        console.print()
        return

    print(title)
    print(f"r/{subreddit} | u/{author} | {score} pts | {comments_count} comments | {age}")
    if permalink_url:
        print(permalink_url)
    if selftext:
        print()
        print(selftext)
    print()


def display_comment_tree(children: list, depth: int = 0, max_depth: int = 3, pretty: bool = True):
    """Recursively display a comment tree with indentation."""
    for child in children:
        if child.get("kind") != "t1":
            continue

        data = child.get("data", {})
        author = data.get("author", "[deleted]")
        score = format_number(data.get("score", 0))
        age = format_timestamp(data.get("created_utc"))
        body = data.get("body", "")

        if pretty:
            bar = "[dim]|[/dim] " * depth
            console.print(
                f"{bar}[bold cyan]u/{author}[/bold cyan] "
                f"[green]({score} pts)[/green] "
                f"[dim]{age}[/dim]"
            )
            if body and body != "[deleted]":
                for line in body.split("\n"):
                    if line.strip():
                        console.print(f"{bar}  {escape(line)}")
            console.print(f"{bar}")
        else:
            indent = "  " * depth
            print(f"{indent}u/{author} ({score} pts) {age}")
            if body and body != "[deleted]":
                for line in body.split("\n"):
                    if line.strip():
                        print(f"{indent}  {line}")
            print()

        if depth < max_depth - 1:
            replies = data.get("replies")
            # Reddit sends "" instead of a listing when there are no replies
            if replies and isinstance(replies, dict):
                reply_children = replies.get("data", {}).get("children", [])
                if reply_children:
                    display_comment_tree(reply_children, depth=depth + 1, max_depth=max_depth, pretty=pretty)


def _show_listing(result: Any, empty_message: str, command: str, output: Optional[str],
                  json_output: bool, copy: bool, pretty: bool):
    """Render a listing envelope as JSON, a table or plain lines."""
    if json_output or output or copy:
        handle_output(result, output_file=output, copy=copy, pretty=pretty)
        return

    listing = result.get("data", {}) if isinstance(result, dict) else {}
    posts = listing.get("children", [])
    if not posts:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return

    console.print(f"[green]Found {len(posts)} posts[/green]")
    if pretty:
        display_post_table(posts)
    else:
        display_post_lines(posts)

    next_after = listing.get("after")
    if next_after:
        _print_next_after_hint(command, next_after, pretty)


# ---------------------------------------------------------------------------
# Click command group
# ---------------------------------------------------------------------------


@click.group()
def reddit():
    """Reddit commands - search a subreddit, list new posts, read a post.

    \b
    Examples:
        redditread reddit search programming "javascript" -l 10
        redditread reddit latest python
        redditread reddit post https://www.reddit.com/r/sub/comments/id/slug/
    """
    pass


def _output_options(func):
    func = click.option("--pretty/--no-pretty", default=None, help="Pretty print output")(func)
    func = click.option("--copy", is_flag=True, help="Copy JSON to clipboard")(func)
    func = click.option("--json", "json_output", is_flag=True, help="Output raw Reddit JSON")(func)
    func = click.option("-o", "--output", help="Save JSON to file")(func)
    return func


@reddit.command(name="search")
@click.argument("subreddit")
@click.argument("query")
@click.option("--limit", "-l", type=click.IntRange(1, 100), default=25, help="Max results (1-100, default: 25)")
@click.option(
    "--sort",
    type=click.Choice([mode.value for mode in SortMode]),
    default=SortMode.RELEVANCE.value,
    help="Sort order (default: relevance)",
)
@click.option(
    "--time",
    "-t",
    "time_filter",
    type=click.Choice([tf.value for tf in TimeFilter]),
    default=None,
    help="Time filter (omitted unless given)",
)
@click.option("--after", default=None, help="Pagination cursor from previous result")
@click.option("--before", default=None, help="Pagination cursor for the previous page")
@_output_options
def reddit_search(
    subreddit: str,
    query: str,
    limit: int,
    sort: str,
    time_filter: Optional[str],
    after: Optional[str],
    before: Optional[str],
    output: Optional[str],
    json_output: bool,
    copy: bool,
    pretty: Optional[bool],
):
    """Search posts in a subreddit.

    \b
    Examples:
        redditread reddit search programming javascript
        redditread reddit search python "async io" --sort top -t week -l 10
    """
    pretty = resolve_pretty(pretty)
    subreddit_name = _normalize_subreddit(subreddit)
    if not query.strip():
        raise click.BadParameter("query cannot be empty", param_hint="QUERY")

    client = get_reddit_client()
    opts = SearchOptions(limit=limit, sort=sort, time_range=time_filter, after=after, before=before)
    result = _fetch(
        f"Searching r/{subreddit_name} for '{query}'...",
        lambda: client.search_subreddit(subreddit_name, query, opts),
    )

    cmd = f"redditread reddit search {shlex.quote(subreddit_name)} {shlex.quote(query)} --sort {sort} -l {limit}"
    if time_filter:
        cmd += f" -t {time_filter}"
    _show_listing(result, "No results found", cmd, output, json_output, copy, pretty)


@reddit.command(name="latest")
@click.argument("subreddit")
@click.option("--limit", "-l", type=click.IntRange(1, 100), default=25, help="Max posts (1-100, default: 25)")
@click.option("--after", default=None, help="Pagination cursor from previous result")
@click.option("--before", default=None, help="Pagination cursor for the previous page")
@_output_options
def reddit_latest(
    subreddit: str,
    limit: int,
    after: Optional[str],
    before: Optional[str],
    output: Optional[str],
    json_output: bool,
    copy: bool,
    pretty: Optional[bool],
):
    """List the newest posts in a subreddit.

    \b
    Examples:
        redditread reddit latest python
        redditread reddit latest r/programming -l 50 --after t3_1abc234
    """
    pretty = resolve_pretty(pretty)
    subreddit_name = _normalize_subreddit(subreddit)

    client = get_reddit_client()
    opts = ListingOptions(limit=limit, after=after, before=before)
    result = _fetch(
        f"Fetching r/{subreddit_name}/new...",
        lambda: client.get_latest_posts(subreddit_name, opts),
    )

    cmd = f"redditread reddit latest {shlex.quote(subreddit_name)} -l {limit}"
    _show_listing(result, f"No posts found in r/{subreddit_name}", cmd, output, json_output, copy, pretty)


@reddit.command(name="post")
@click.argument("url")
@click.option("--depth", "-d", type=click.IntRange(min=1), default=3, help="Comment nesting depth shown (default: 3)")
@click.option("--no-comments", is_flag=True, help="Show only the post")
@_output_options
def reddit_post(
    url: str,
    depth: int,
    no_comments: bool,
    output: Optional[str],
    json_output: bool,
    copy: bool,
    pretty: Optional[bool],
):
    """Fetch a Reddit post with comments.

    \b
    Examples:
        redditread reddit post https://www.reddit.com/r/python/comments/abc123/my_post/
        redditread reddit post URL --depth 1 --json
    """
    pretty = resolve_pretty(pretty)
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise click.BadParameter("expected an absolute Reddit post URL", param_hint="URL")

    client = get_reddit_client()
    result = _fetch("Fetching post...", lambda: client.retrieve_post(url))

    if json_output or output or copy:
        handle_output(result, output_file=output, copy=copy, pretty=pretty)
        return

    if not isinstance(result, list) or len(result) < 2:
        console.print("[red]Unexpected response format[/red]")
        raise click.Abort()

    post_children = result[0].get("data", {}).get("children", [])
    comment_children = result[1].get("data", {}).get("children", [])
    if not post_children:
        console.print("[yellow]Post not found[/yellow]")
        return

    display_post(post_children[0], pretty=pretty)
    if no_comments or not comment_children:
        return

    if pretty:
        console.print("[bold]Comments[/bold]")
        console.print("-" * 40)
    else:
        print("Comments")
        print("-" * 40)
    display_comment_tree(comment_children, depth=0, max_depth=depth, pretty=pretty)
