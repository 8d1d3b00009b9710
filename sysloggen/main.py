# sysloggen/main.py
"""Main entry point for the syslog generator."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AppConfig, load_config
from .exceptions import SyslogGenError
from .generator import DispatchEngine, DispatchPlan
from .pools import ContentPools
from .senders import ConsoleEcho, DatagramSender

DEFAULT_CONFIG_PATH = 'config.yaml'


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    # -h selects the host file, so help is only available as --help
    parser = argparse.ArgumentParser(
        prog='sysloggen',
        description='Send syslog messages over UDP from concurrent workers',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  # 10000 random messages over 4 workers
  sysloggen 192.168.1.100 514 10000 4
  
  # Messages and hostnames from files, 5 ms between sends
  sysloggen 192.168.1.100 514 1000 2 -f messages.txt -h hosts.txt -d 5
  
  # Spoof a fixed source address (needs IP_FREEBIND / root)
  sysloggen 192.168.1.100 514 1000 2 -s 10.0.0.5
  
  # Rotate source addresses per message
  sysloggen 192.168.1.100 514 1000 2 -S sources.txt
        """
    )
    
    parser.add_argument('destination', help='IP address of the syslog receiver')
    parser.add_argument('port', type=int, help='Port of the syslog receiver (e.g. 514)')
    parser.add_argument('message_count', type=int, help='Total number of messages to send')
    parser.add_argument('worker_count', type=int, help='Number of concurrent workers')
    
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        '-s', dest='source_ip', metavar='SOURCE_IP', default=None,
        help='Source IP address for outgoing packets (default: chosen by the OS)'
    )
    source_group.add_argument(
        '-S', dest='source_ip_file', metavar='SOURCE_IP_FILE', default=None,
        help='File of source IP addresses, one per line, picked per message'
    )
    
    input_group = parser.add_argument_group('Input Options')
    input_group.add_argument(
        '-f', dest='message_file', metavar='MESSAGE_FILE', default=None,
        help='File of message bodies, one per line'
    )
    input_group.add_argument(
        '-h', dest='host_file', metavar='HOST_FILE', default=None,
        help='File of hostnames, one per line'
    )
    input_group.add_argument(
        '-d', dest='delay_ms', metavar='DELAY_MS', type=int, default=None,
        help='Delay in milliseconds after each message, per worker'
    )
    
    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument(
        '--config',
        default=None,
        help='Path to configuration file (default: config.yaml, if present)'
    )
    config_group.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Do not print every message before it is sent'
    )
    config_group.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    config_group.add_argument(
        '--help',
        action='help',
        help='Show this help message and exit'
    )
    
    return parser


def apply_arguments(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Override config with command line arguments."""
    if args.source_ip is not None:
        config.output.source_ip = args.source_ip
        config.output.source_ip_file = None
    if args.source_ip_file is not None:
        config.output.source_ip_file = args.source_ip_file
        config.output.source_ip = None
    if args.message_file is not None:
        config.inputs.message_file = args.message_file
    if args.host_file is not None:
        config.inputs.host_file = args.host_file
    if args.delay_ms is not None:
        config.generator.delay_ms = args.delay_ms
    if args.quiet:
        config.output.echo = False
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    
    try:
        if args.config is None:
            file_config = load_config(DEFAULT_CONFIG_PATH)
        else:
            file_config = load_config(args.config, required=True)
        config = apply_arguments(file_config, args)
        config.validate()
        
        pools = ContentPools.load(
            message_file=config.inputs.message_file,
            host_file=config.inputs.host_file,
            source_ip_file=config.output.source_ip_file,
        )
        plan = DispatchPlan(
            destination=(args.destination, args.port),
            total_messages=args.message_count,
            worker_count=args.worker_count,
            source_address=config.output.source_ip,
            delay=config.generator.delay_ms / 1000.0,
        )
        sender = DatagramSender(
            plan.destination,
            source_address=plan.source_address,
            source_pool=pools.source_addresses,
            console=ConsoleEcho(enabled=config.output.echo),
        )
        result = DispatchEngine(plan, pools, sender=sender).run()
        
    except SyslogGenError as e:
        logging.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nReceived interrupt signal...")
        return 130
    
    print(result.get_summary(plan))
    return 0


if __name__ == '__main__':
    sys.exit(main())
