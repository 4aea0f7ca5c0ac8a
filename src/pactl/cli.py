from __future__ import annotations

import json
import logging
from typing import Dict, List, Tuple

import click
from tabulate import tabulate

from palib.config import ConfigError, load_config
import palib.decoder as decoder
from palib.errors import DecodeError, format_config_error, format_decode_error, suggest_troubleshooting_steps


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("configs", nargs=-1, metavar="BASE64_CONFIG...")
@click.option(
    "-n",
    "--name",
    "names",
    multiple=True,
    help="Decode a named configuration from the settings file (repeatable)",
)
@click.option(
    "--json-output",
    "json_output",
    is_flag=True,
    help="Output JSON instead of labelled lines (pretty-printed)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging to stderr (what the CLI is doing)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    configs: Tuple[str, ...],
    names: Tuple[str, ...],
    json_output: bool,
    verbose: bool,
) -> None:
    """Legacy PowerAuth configuration helper.

    Parses the simplified configuration introduced in PowerAuth Server 1.5
    into legacy parameters (appKey, appSecret, masterServerPublicKey) that can
    be used to configure PowerAuth mobile SDK older than 1.8.0.

    Each BASE64_CONFIG is decoded strictly; only whitespace around the
    value is ignored. With --json-output all decoded inputs are printed as
    a single JSON list.
    """
    # Configure logging once per process
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    if verbose:
        logging.getLogger("palib").setLevel(logging.DEBUG)
    log = logging.getLogger("pactl.cli")

    if not configs and not names:
        click.echo(ctx.get_help(), err=True)
        raise SystemExit(1)

    try:
        log.info("Loading settings...")
        settings = load_config()
        log.info("Loaded settings from %s", settings.source_path or "<defaults>")
        inputs: List[Tuple[str, str]] = [(settings.lookup(n), n) for n in names]
    except ConfigError as e:
        click.echo(format_config_error(e), err=True)
        raise SystemExit(2)

    inputs.extend((c, f"argument {i}") for i, c in enumerate(configs, start=1))
    as_json = json_output or settings.output == "json"

    failed = False
    decoded: List[Dict[str, str]] = []
    for text, source in inputs:
        try:
            log.info("Decoding %s", source)
            result = decoder.decode(text)
        except DecodeError as e:
            failed = True
            log.info("Decoding %s failed: %s", source, e)
            click.echo(format_decode_error(e, {"source": source}), err=True)
            if verbose:
                click.echo("\nTroubleshooting suggestions:", err=True)
                for suggestion in suggest_troubleshooting_steps(e)[:3]:
                    click.echo(f"  • {suggestion}", err=True)
            continue

        fields = result.to_base64()
        if as_json:
            decoded.append({"source": source, **fields})
        else:
            click.echo("Legacy PowerAuth configuration:")
            rows = [[label, ":", value] for label, value in fields.items()]
            click.echo(tabulate(rows, tablefmt="plain", disable_numparse=True))

    if as_json:
        # one document for all inputs, failures go to stderr only
        click.echo(json.dumps(decoded, indent=2, sort_keys=True))

    if failed:
        raise SystemExit(1)


def main() -> None:  # entry point
    cli(standalone_mode=True)


if __name__ == "__main__":  # pragma: no cover
    main()
