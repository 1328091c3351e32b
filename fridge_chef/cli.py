"""
Command line front end for Fridge Chef.

Usage:
  fridge-chef suggest "chicken, broccoli, garlic"
  fridge-chef scan fridge.mp4 [--suggest]
"""
import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from fridge_chef.ai.flows import RecipeFlows, define_flows
from fridge_chef.config import configure_logging
from fridge_chef.services.kitchen_session import KitchenSession
from fridge_chef.services.recipe_cards import build_recipe_card, render_recipe_card

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fridge-chef", description="Recipe suggestions from your fridge")
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    suggest = sub.add_parser("suggest", help="Suggest recipes for comma-separated ingredients")
    suggest.add_argument("ingredients", help='e.g. "chicken breast, broccoli, soy sauce"')

    scan = sub.add_parser("scan", help="Identify ingredients in a video of your fridge")
    scan.add_argument("video", type=Path, help="Video file to upload")
    scan.add_argument("--media-type", default=None, help="Override the guessed MIME type")
    scan.add_argument("--suggest", action="store_true", help="Suggest recipes for the identified ingredients")
    return parser


def print_session(session: KitchenSession, out=sys.stdout) -> None:
    for message in (session.video_error, session.suggestion_error):
        if message:
            print(f"Error: {message}", file=out)
    if session.notice:
        print(session.notice, file=out)
    for recipe in session.recipes or []:
        print(file=out)
        print(render_recipe_card(build_recipe_card(recipe)), file=out)


async def run(args: argparse.Namespace, flows: RecipeFlows, out=sys.stdout) -> int:
    """Execute one command; returns the process exit code."""
    session = KitchenSession(flows)

    if args.command == "suggest":
        recipes = await session.submit_ingredients(args.ingredients)
        print_session(session, out)
        return 0 if recipes is not None else 1

    media_type = args.media_type or mimetypes.guess_type(args.video.name)[0] or ""
    try:
        data = args.video.read_bytes()
    except OSError as e:
        print(f"Error: could not read {args.video}: {e}", file=out)
        return 1

    identified = await session.upload_video(data, media_type)
    if identified is None:
        print_session(session, out)
        return 1

    print(f"Identified ingredients: {identified or '(none)'}", file=out)
    if args.suggest and identified:
        recipes = await session.submit_ingredients()
        print_session(session, out)
        return 0 if recipes is not None else 1

    print_session(session, out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(run(args, define_flows()))


if __name__ == "__main__":
    sys.exit(main())
