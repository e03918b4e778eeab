import argparse
import sys

from graph_subscriptions import constants as gcst
from graph_subscriptions.chain_interactions import chain_utils
from graph_subscriptions.logging_utils import get_logger
from graph_subscriptions.security.tickets import operations
from graph_subscriptions.security.tickets.address import Address
from graph_subscriptions.security.tickets.errors import TicketError
from graph_subscriptions.security.tickets.models import TicketPayload

logger = get_logger(__name__)


def issue(args: argparse.Namespace) -> int:
    signer = chain_utils.load_signer(args.private_key)
    payload = TicketPayload(
        chain_id=args.chain_id,
        contract=Address.from_hex(args.contract),
        signer=signer.address,
        user=Address.from_hex(args.user) if args.user else None,
        name=args.name,
        allowed_subgraphs=args.allowed_subgraphs,
        allowed_deployments=args.allowed_deployments,
        allowed_domains=args.allowed_domains,
    )
    print(operations.to_ticket_base64(payload, signer))
    return 0


def verify(args: argparse.Namespace) -> int:
    try:
        payload, signature = operations.from_ticket_base64(args.ticket)
    except TicketError as e:
        logger.error(f"Invalid ticket: {e}")
        return 1

    print(payload.model_dump_json(exclude_none=True, indent=2))
    print(f"signature: 0x{signature.hex()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Issue and verify subscription tickets")
    subparsers = parser.add_subparsers(dest="command", required=True)

    issue_parser = subparsers.add_parser("issue", help="Sign a new ticket")
    issue_parser.add_argument("--private-key", type=str, required=True, help="Hex private key of the signer")
    issue_parser.add_argument("--chain-id", type=int, default=gcst.DEFAULT_CHAIN_ID, help="EIP-155 chain ID")
    issue_parser.add_argument(
        "--contract",
        type=str,
        default=gcst.DEFAULT_SUBSCRIPTIONS_CONTRACT,
        help="Subscriptions contract address",
    )
    issue_parser.add_argument("--user", type=str, default=None, help="Subscription owner, if not the signer")
    issue_parser.add_argument("--name", type=str, default=None, help="Nice name for the ticket")
    issue_parser.add_argument("--allowed-subgraphs", type=str, default=None, help="Comma-separated subgraph IDs")
    issue_parser.add_argument("--allowed-deployments", type=str, default=None, help="Comma-separated deployment IDs")
    issue_parser.add_argument("--allowed-domains", type=str, default=None, help="Comma-separated origin domains")
    issue_parser.set_defaults(func=issue)

    verify_parser = subparsers.add_parser("verify", help="Decode and verify a ticket")
    verify_parser.add_argument("ticket", type=str, help="The base64 ticket")
    verify_parser.set_defaults(func=verify)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
