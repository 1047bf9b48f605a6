"""Command line interface for the Firecrawl job client."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from .client import JobClient
from .config import load_config
from .exceptions import FirecrawlError
from .logging_utils import configure_logging, get_logger, resolve_level

logger = get_logger(__name__)

app = typer.Typer(help="Scrape and crawl pages through the Firecrawl API")

ApiKeyOption = typer.Option(None, "--api-key", help="API key (defaults to FIRECRAWL_API_KEY)")
ApiUrlOption = typer.Option(None, "--api-url", help="API base URL (defaults to FIRECRAWL_API_URL)")
LogLevelOption = typer.Option("WARNING", "--log-level", help="Logging level")
LogFileOption = typer.Option(None, "--log-file", help="Optional log file path")


def build_client(api_key: Optional[str], api_url: Optional[str]) -> JobClient:
    # .env is only honoured by the command line; the library reads the process env.
    config = load_config()
    return JobClient(api_key=api_key or config.api_key, api_url=api_url or config.api_url)


def parse_params(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        params = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"--params is not valid JSON: {exc}") from exc
    if not isinstance(params, dict):
        raise typer.BadParameter("--params must be a JSON object")
    return params


def emit(result: Any, output: Optional[Path]) -> None:
    text = json.dumps(result, indent=2, ensure_ascii=False)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote result to %s", output)
        typer.echo(f"Result written to {output}")
    else:
        typer.echo(text)


def setup_logging(log_file: Optional[Path], log_level: str) -> None:
    try:
        level = resolve_level(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    configure_logging(log_file, level)


def _run(api_key: Optional[str], api_url: Optional[str], action) -> Any:
    try:
        with build_client(api_key, api_url) as client:
            return action(client)
    except FirecrawlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        # Malformed FIRECRAWL_TIMEOUT / FIRECRAWL_POLL_INTERVAL.
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def scrape(
    url: str,
    params: Optional[str] = typer.Option(None, help="Extra scrape options as a JSON object"),
    output: Optional[Path] = typer.Option(None, help="Write the result JSON to this file"),
    api_key: Optional[str] = ApiKeyOption,
    api_url: Optional[str] = ApiUrlOption,
    log_level: str = LogLevelOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Scrape a single page."""

    setup_logging(log_file, log_level)
    options = parse_params(params)
    result = _run(api_key, api_url, lambda client: client.scrape(url, options))
    emit(result, output)


@app.command()
def crawl(
    url: str,
    params: Optional[str] = typer.Option(None, help="Extra crawl options as a JSON object"),
    poll_interval: Optional[float] = typer.Option(
        None, min=0.0, help="Seconds between status checks (defaults to FIRECRAWL_POLL_INTERVAL or 2)"
    ),
    max_polls: Optional[int] = typer.Option(None, min=1, help="Give up after this many status checks"),
    output: Optional[Path] = typer.Option(None, help="Write the result JSON to this file"),
    api_key: Optional[str] = ApiKeyOption,
    api_url: Optional[str] = ApiUrlOption,
    log_level: str = LogLevelOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Crawl a site and wait for the job to finish."""

    setup_logging(log_file, log_level)
    options = parse_params(params)
    result = _run(
        api_key,
        api_url,
        lambda client: client.crawl(url, options, poll_interval=poll_interval, max_polls=max_polls),
    )
    emit(result, output)


@app.command()
def status(
    job_id: str,
    api_key: Optional[str] = ApiKeyOption,
    api_url: Optional[str] = ApiUrlOption,
    log_level: str = LogLevelOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Print the raw status of a crawl job."""

    setup_logging(log_file, log_level)
    emit(_run(api_key, api_url, lambda client: client.check_crawl_status(job_id)), None)


@app.command()
def cancel(
    job_id: str,
    api_key: Optional[str] = ApiKeyOption,
    api_url: Optional[str] = ApiUrlOption,
    log_level: str = LogLevelOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Cancel a crawl job."""

    setup_logging(log_file, log_level)
    emit(_run(api_key, api_url, lambda client: client.cancel_crawl(job_id)), None)


@app.command()
def show_config() -> None:
    """Print the active configuration with the API key masked."""

    try:
        config = load_config()
    except ValueError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    values = asdict(config)
    values["api_key"] = config.masked_key()
    typer.echo(json.dumps(values, indent=2))


if __name__ == "__main__":
    app()
