import json
import sys
from typing import Dict, Optional, Tuple

import click
from httpx import Response

from .._builder import RequestBuilder
from .._utils import setup_logging
from ..models.errors import ConfigurationError, RequestFailure
from ..models.http_method import HttpMethod


def _parse_pairs(
    ctx: click.Context, param: click.Parameter, values: Tuple[str, ...]
) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep:
            raise click.BadParameter(f"expected KEY=VALUE, got '{value}'")
        pairs[key.strip()] = item
    return pairs


@click.command()
@click.argument(
    "method", type=click.Choice([m.value for m in HttpMethod], case_sensitive=False)
)
@click.argument("url")
@click.option(
    "--param", "-p", "params", multiple=True, callback=_parse_pairs,
    help="Query parameter KEY=VALUE (GET and DELETE)",
)
@click.option(
    "--header", "-H", "headers", multiple=True, callback=_parse_pairs,
    help="Request header KEY=VALUE",
)
@click.option(
    "--cookie", "-c", "cookies", multiple=True, callback=_parse_pairs,
    help="Cookie KEY=VALUE",
)
@click.option("--data", "-d", help="Request body")
@click.option("--content-type", "-t", help="Content type of the request body")
@click.option(
    "--json", "as_json", is_flag=True,
    help="Parse --data as JSON and send it encoded as application/json",
)
@click.option("--status", is_flag=True, help="Print the status line before the body")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def request(
    method: str,
    url: str,
    params: Dict[str, str],
    headers: Dict[str, str],
    cookies: Dict[str, str],
    data: Optional[str],
    content_type: Optional[str],
    as_json: bool,
    status: bool,
    debug: bool,
) -> None:
    """Send one HTTP request and print the response body."""
    setup_logging(debug)

    body = data
    if as_json and data is not None:
        try:
            body = json.loads(data)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data") from e

    failures: list[RequestFailure] = []

    try:
        executable = (
            RequestBuilder(method.upper(), Response)
            .set_url(url)
            .set_params(params)
            .set_headers(headers)
            .set_cookies(cookies)
            .set_body(body)
            .set_content_type(content_type)
            .on_exception(lambda error, spec: failures.append(error))
            .build()
        )
    except ConfigurationError as e:
        raise click.UsageError(e.message) from e

    response = executable.execute().result()

    if failures:
        click.echo(f"Error: {failures[0]}", err=True)
        sys.exit(1)

    if status:
        click.echo(f"HTTP {response.status_code} {response.reason_phrase}")
    click.echo(response.text)
