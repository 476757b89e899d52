"""CLI for polardigest: summarize exported Polar AccessLink JSON."""

import json
import logging

import click

from polardigest.config import DEFAULT_CONFIG
from polardigest.errors import PolarDigestError


def _load(file: str):
    try:
        with open(file, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{file}: invalid JSON ({e})")
    except UnicodeDecodeError as e:
        raise click.ClickException(f"{file}: not UTF-8 text ({e})")


def _run(kind: str, file: str, output: str | None, **kwargs) -> None:
    from polardigest.analytics.pipeline import summarize

    payload = _load(file)
    try:
        batch = summarize(kind, payload, DEFAULT_CONFIG, **kwargs)
    except PolarDigestError as e:
        raise click.ClickException(str(e))

    text = batch.to_json()
    if output:
        with open(output, "w") as f:
            f.write(text)
        click.echo(f"{len(batch.items)} {kind} summaries written to {output}")
    else:
        click.echo(text)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log skipped channels and samples.")
def main(verbose: bool) -> None:
    """polardigest: compact summaries of Polar physiological time series."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--output", "-o", default=None, help="Write summary JSON to file.")
@click.option("--no-samples", is_flag=True, help="Skip per-channel sample summaries.")
def exercise(file: str, output: str | None, no_samples: bool) -> None:
    """Summarize exercises, including their sample channels."""
    _run("exercise", file, output, include_samples=not no_samples)


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--output", "-o", default=None, help="Write summary JSON to file.")
def sleep(file: str, output: str | None) -> None:
    """Summarize sleep nights (architecture, overnight heart rate)."""
    _run("sleep", file, output)


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--output", "-o", default=None, help="Write summary JSON to file.")
def recharge(file: str, output: str | None) -> None:
    """Summarize nightly recharge (HRV and breathing trends)."""
    _run("recharge", file, output)


@main.command("heart-rate")
@click.argument("file", type=click.Path(exists=True))
@click.option("--output", "-o", default=None, help="Write summary JSON to file.")
def heart_rate(file: str, output: str | None) -> None:
    """Summarize continuous heart rate days into half-hour buckets."""
    _run("heart-rate", file, output)


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--output", "-o", default=None, help="Write summary JSON to file.")
def activity(file: str, output: str | None) -> None:
    """Summarize daily activity (hourly steps, zone minutes)."""
    _run("activity", file, output)


if __name__ == "__main__":
    main()
