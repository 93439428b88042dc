"""CLI entry point for layer-order."""

import json
import logging
import sys

import click

from layer_order.config import DEFAULT_ITERATIONS, OrderConfig
from layer_order.layout import order_ranked
from layer_order.loader import parse_document


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--iterations", "-n", "iterations", type=int, default=DEFAULT_ITERATIONS, help="Number of barycenter sweeps")
@click.option("--seed-unreached", is_flag=True, help="Also place nodes not reachable from a rank-0 node")
@click.option("--json", "as_json", is_flag=True, help="Emit the layering as JSON")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log every iteration to stderr")
def main(
    input: str | None,
    iterations: int,
    seed_unreached: bool,
    as_json: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Order the layers of a ranked graph to minimise edge crossings."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    config = OrderConfig(iterations=iterations, seed_unreached=seed_unreached)
    try:
        rg = parse_document(text)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    if rg.node_count() == 0:
        if output:
            try:
                with open(output, "w") as f:
                    f.write("")
            except OSError as e:
                click.echo(f"error: cannot write '{output}': {e}", err=True)
                sys.exit(1)
        return

    try:
        result = order_ranked(rg, config)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    if as_json:
        rendered = json.dumps({"layers": result.layering, "crossings": result.crossings}) + "\n"
    else:
        lines = [" ".join(str(node) for node in layer) for layer in result.layering]
        lines.append(f"crossings: {result.crossings}")
        rendered = "\n".join(lines) + "\n"

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
