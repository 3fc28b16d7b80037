import argparse
import logging
import sys

from fantasypets.commands.registrar import CommandMapNotFoundError, RegistrationLedger
from fantasypets.config import Config
from fantasypets.console import Console
from fantasypets.host.server import Server
from fantasypets.loginit import initialize_logging
from fantasypets.plugin import FantasyPetsPlugin

log = None


def initialize_system(log_level=None, config_path=None):
    """Build the host, the registration ledger and the plugin, then enable it."""
    global log
    config = Config(path=config_path) if config_path else Config()
    if log_level:
        config.logging["log_level"] = log_level
    initialize_logging(config)

    log = logging.getLogger('fantasypets')
    log.info(f'Starting {config.plugin["name"]}')

    server = Server()
    # one ledger for the life of the process; it outlives plugin reloads
    ledger = RegistrationLedger(server)
    plugin = FantasyPetsPlugin(server, ledger, config)
    plugin.on_enable()

    log.info('System initialization complete')
    return config, server, plugin


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='FantasyPets plugin console')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('-c', '--config', type=str, default=None,
                        help='Path to config file (default: config.yaml)')
    parser.add_argument('--player', type=str, default=None,
                        help='Run commands as this player instead of the console')
    parser.add_argument('--op', action='store_true',
                        help='Make the player an operator')
    parser.add_argument('-p', '--perm', action='append', default=[],
                        help='Grant a permission node to the player (repeatable)')
    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_arguments()
    log_level = "DEBUG" if args.debug else None

    try:
        config, server, plugin = initialize_system(log_level, args.config)
    except CommandMapNotFoundError as e:
        logging.getLogger('fantasypets').critical(f'Cannot register commands: {e}')
        return 1

    sender = None
    if args.player:
        sender = server.add_player(args.player, permissions=args.perm, op=args.op)

    Console(server, plugin, sender).run()
    plugin.on_disable()
    log.info('Shutdown complete')
    return 0


if __name__ == '__main__':
    sys.exit(main())
