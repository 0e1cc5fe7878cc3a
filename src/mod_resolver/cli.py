"""
CLI entry point for mod-resolver.

Commands:
  - ``mod-resolver resolve <platform> <mod_id>... -g <version> -l <loader>``
  - ``mod-resolver latest-minecraft``
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Optional

import click

from mod_resolver.config import DEFAULT_CONCURRENCY, DEFAULT_RELEASE_TYPES
from mod_resolver.errors import ModResolverError
from mod_resolver.minecraft import MinecraftVersions
from mod_resolver.models import (
    CanonicalModDescriptor,
    Loader,
    Platform,
    ReleaseType,
    ResolutionRequest,
    parse_platform,
)
from mod_resolver.service import ModResolutionService
from mod_resolver.transport import RateLimitedTransport


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--curseforge-api-key", envvar="CURSEFORGE_API_KEY", default="", help="CurseForge API key.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, curseforge_api_key: str) -> None:
    """mod-resolver: find the right CurseForge / Modrinth file for your game."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["curseforge_api_key"] = curseforge_api_key


@main.command()
@click.argument("platform", type=click.Choice([p.value for p in Platform], case_sensitive=False))
@click.argument("mod_ids", nargs=-1, required=True)
@click.option("--game-version", "-g", required=True, help="Minecraft version, e.g. 1.20.1.")
@click.option("--loader", "-l", required=True, type=click.Choice([loader.value for loader in Loader], case_sensitive=False))
@click.option(
    "--release-type", "-r", "release_types",
    multiple=True,
    type=click.Choice([r.value for r in ReleaseType], case_sensitive=False),
    help="Acceptable release type (repeatable). Default: release, beta.",
)
@click.option("--fallback/--no-fallback", default=False, help="Accept files for the previous patch or major.minor.")
@click.option("--pin", default=None, help="Resolve exactly this file name / version number.")
@click.option("--concurrency", "-c", default=DEFAULT_CONCURRENCY, help="Max parallel resolutions.")
@click.option("--min-interval", default=0.0, help="Minimum seconds between API requests.")
@click.pass_context
def resolve(
    ctx: click.Context,
    platform: str,
    mod_ids: tuple[str, ...],
    game_version: str,
    loader: str,
    release_types: tuple[str, ...],
    fallback: bool,
    pin: Optional[str],
    concurrency: int,
    min_interval: float,
) -> None:
    """Resolve one or more mods and print their download details as JSON."""
    if pin and len(mod_ids) > 1:
        click.echo("Error: --pin only makes sense for a single mod.", err=True)
        sys.exit(2)

    requests = [
        ResolutionRequest(
            mod_id=mod_id,
            allowed_release_types=release_types or DEFAULT_RELEASE_TYPES,
            game_version=game_version,
            loader=loader,
            allow_fallback=fallback,
            version_label=pin,
        )
        for mod_id in mod_ids
    ]
    target = parse_platform(platform)

    async def run() -> bool:
        async with RateLimitedTransport(concurrency=concurrency, min_interval=min_interval) as transport:
            if not await MinecraftVersions(transport).is_known(game_version):
                click.echo(f"Warning: Mojang does not list Minecraft {game_version}", err=True)

            service = ModResolutionService(
                transport, curseforge_api_key=ctx.obj["curseforge_api_key"] or None
            )
            results = await service.resolve_many(
                [(target, request) for request in requests],
                concurrency=concurrency,
                progress=len(requests) > 1,
            )

        ok = True
        for request, result in zip(requests, results):
            if isinstance(result, CanonicalModDescriptor):
                click.echo(result.model_dump_json(by_alias=True))
            else:
                ok = False
                click.echo(json.dumps({"id": request.mod_id, **result.to_dict()}), err=True)
        return ok

    if not asyncio.run(run()):
        sys.exit(1)


@main.command("latest-minecraft")
def latest_minecraft() -> None:
    """Print the latest Minecraft release."""

    async def run() -> str:
        async with RateLimitedTransport() as transport:
            return await MinecraftVersions(transport).latest_release()

    try:
        click.echo(asyncio.run(run()))
    except ModResolverError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
