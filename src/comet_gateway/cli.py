"""comet-gateway CLI entry point."""
from __future__ import annotations

import json
import logging
import sys

import click

from comet_gateway.catalog import DegradeReason, resolve_catalog
from comet_gateway.config import HandlerOptions
from comet_gateway.errors import SDKError
from comet_gateway.handler import CometAPIHandler
from comet_gateway.stream import TextEvent, UsageEvent


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """comet-gateway: talk to CometAPI through its OpenAI-compatible API."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--api-key", envvar="COMETAPI_API_KEY", default=None, help="CometAPI key")
@click.option("--base-url", envvar="COMETAPI_BASE_URL", default=None, help="Gateway base URL")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the catalog as JSON")
def models(api_key: str | None, base_url: str | None, as_json: bool) -> None:
    """List the models the gateway offers."""

    def report(reason: DegradeReason, detail: str) -> None:
        click.echo(f"Using static model table ({reason}): {detail}", err=True)

    catalog = resolve_catalog(api_key, base_url, on_degrade=report)

    if as_json:
        payload = {
            model_id: {
                "contextWindow": info.context_window,
                "maxTokens": info.max_tokens,
                "supportsImages": info.supports_images,
                "supportsPromptCache": info.supports_prompt_cache,
                "inputPrice": info.input_price,
                "outputPrice": info.output_price,
                "description": info.description,
            }
            for model_id, info in sorted(catalog.items())
        }
        click.echo(json.dumps(payload, indent=2))
        return

    for model_id, info in sorted(catalog.items()):
        images = "images" if info.supports_images else "text"
        click.echo(f"{model_id}\t{info.context_window}\t{images}\t{info.description}")


@cli.command()
@click.argument("prompt")
@click.option("--model", "model_id", default=None, help="Model id (defaults to COMETAPI_MODEL_ID)")
@click.option("--system", "system_prompt", default="You are a helpful assistant.", help="System prompt")
@click.option("--stream/--no-stream", default=True, help="Stream the reply")
def ask(prompt: str, model_id: str | None, system_prompt: str, stream: bool) -> None:
    """Send PROMPT to the gateway and print the reply."""
    handler = CometAPIHandler(HandlerOptions.from_env(model_id=model_id))
    try:
        if not stream:
            click.echo(handler.complete_prompt(prompt))
            return

        events = handler.create_message(system_prompt, [{"role": "user", "content": prompt}])
        for event in events:
            if isinstance(event, TextEvent):
                click.echo(event.text, nl=False)
            elif isinstance(event, UsageEvent):
                click.echo("")
                click.echo(
                    f"[tokens in={event.input_tokens} out={event.output_tokens} "
                    f"cost={event.total_cost:.6f}]",
                    err=True,
                )
    except SDKError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    finally:
        handler.client.close()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
