#!/usr/bin/env python3
"""Entry point for building bridge message sign bytes.

This module builds a Bind or TransferOut message from command line
arguments, validates it and prints the canonical bytes an external signer
signs.
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv


# Configure logging before any other imports create loggers
def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Get logger for this module
logger = logging.getLogger(__name__)

from bridge_msg.config import NetworkConfig
from bridge_msg.msgs import BindMsg, BridgeMsg, TransferOutMsg
from bridge_msg.types import Coin, ForeignAddress


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per message type."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Bridge message builder - render sign bytes for cross-chain messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  BRIDGE_NETWORK   - Native network: mainnet or testnet (default: mainnet)
  EXPIRE_WINDOW    - Seconds until expiry when --expire-time is omitted (default: 3600)
  LOG_LEVEL        - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Print sign bytes hex-encoded instead of as JSON text"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    bind = subparsers.add_parser("bind", help="Bind a native token to a foreign contract")
    bind.add_argument("--from", dest="from_address", required=True, help="Bech32 sender address")
    bind.add_argument("--symbol", required=True, help="Native token symbol")
    bind.add_argument("--amount", type=int, required=True, help="Amount to bind")
    bind.add_argument("--contract", required=True, help="Foreign contract address (hex)")
    bind.add_argument("--decimals", type=int, required=True, help="Foreign contract decimals")
    bind.add_argument("--expire-time", type=int, default=None, help="Unix expiry timestamp")

    transfer_out = subparsers.add_parser("transfer-out", help="Transfer value to the foreign chain")
    transfer_out.add_argument("--from", dest="from_address", required=True, help="Bech32 sender address")
    transfer_out.add_argument("--to", required=True, help="Foreign recipient address (hex)")
    transfer_out.add_argument("--amount", type=int, required=True, help="Amount to transfer")
    transfer_out.add_argument("--denom", required=True, help="Coin denomination")
    transfer_out.add_argument("--expire-time", type=int, default=None, help="Unix expiry timestamp")

    return parser


def build_msg(args: argparse.Namespace, config: NetworkConfig) -> BridgeMsg:
    """Build the message selected by ``args.command``.

    Raises:
        ValueError: If the sender address is not valid on the configured network
    """
    sender = config.account_address(args.from_address)
    expire_time = args.expire_time if args.expire_time is not None else config.expire_time()

    match args.command:
        case "bind":
            return BindMsg(
                from_address=sender,
                symbol=args.symbol,
                amount=args.amount,
                contract_address=ForeignAddress.from_hex(args.contract),
                contract_decimals=args.decimals,
                expire_time=expire_time,
            )
        case "transfer-out":
            return TransferOutMsg(
                from_address=sender,
                to=ForeignAddress.from_hex(args.to),
                amount=Coin(denom=args.denom, amount=args.amount),
                expire_time=expire_time,
            )
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the bridge message builder.

    Parses arguments, loads configuration from environment, builds and
    validates the message and writes its sign bytes to stdout.

    Raises:
        SystemExit: On configuration or validation errors
    """
    load_dotenv()
    args: argparse.Namespace = build_parser().parse_args(argv)

    # Set up logging with specified level
    setup_logging(args.log_level)

    try:
        config: NetworkConfig = NetworkConfig.from_env()
        config.log_config()

        msg: BridgeMsg = build_msg(args, config)
        logger.info(f"Built {msg.type()} message: {msg}")

        msg.validate_basic()
        sign_bytes: bytes = msg.sign_bytes()

    except ValueError as e:
        logger.error(f"Invalid message: {e}")
        sys.exit(1)

    print(sign_bytes.hex() if args.hex else sign_bytes.decode("utf-8"))


if __name__ == "__main__":
    main()
