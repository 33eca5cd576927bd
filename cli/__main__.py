"""Entry point for spellbound CLI client."""

import argparse
import sys

import requests

from core.models import Difficulty, GameVariant
from cli.api_client import SpellboundAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Spellbound - spelling practice games')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--variant',
        default='CLASSIC',
        choices=[v.value for v in GameVariant if v not in (GameVariant.WHEEL, GameVariant.MULTIPLAYER)],
        help='Game variant (default: CLASSIC)'
    )
    parser.add_argument(
        '--difficulty',
        default='MEDIUM',
        choices=[d.value for d in Difficulty],
        help='Difficulty (default: MEDIUM)'
    )
    parser.add_argument(
        '--list-variants',
        action='store_true',
        help='List the game variants offered by the server and exit'
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--offline', dest='offline_mode', action='store_const', const=True,
                      help='Play from the offline corpus only')
    mode.add_argument('--online', dest='offline_mode', action='store_const', const=False,
                      help='Turn offline mode off and use the AI generator again')
    args = parser.parse_args()

    client = SpellboundAPIClient(base_url=args.server)

    try:
        if args.list_variants:
            for variant in client.get_variants():
                print(f"{variant['id']:<16} {variant['title']}")
            return
        if args.offline_mode is not None:
            client.set_offline_mode(args.offline_mode)
    except requests.RequestException as e:
        print(f"Error: {e}")
        sys.exit(1)

    ui = ConsoleUI(client, variant=args.variant, difficulty=args.difficulty)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
