import argparse
import json
import logging

from . import keystore, platform_utils
from .config import Config, NodeConfig
from .peer_list import PeerListValidationError, validate_peer_list


def build_config(args: argparse.Namespace):
    """Return ``Config.create_default()`` with the command line overrides."""
    config = Config.create_default()
    try:
        bootstraps = validate_peer_list(getattr(args, "bootstrap", None) or [], "bootstrap")
        relays = validate_peer_list(getattr(args, "relay", None) or [], "relay")
    except PeerListValidationError as exc:
        raise SystemExit(str(exc))
    config.set_bootstraps(bootstraps)
    config.set_relays(relays)
    if isinstance(config, NodeConfig):
        if getattr(args, "serve_as_bootstrap", False):
            config.set_serve_as_bootstrap(True)
        if getattr(args, "serve_as_relay", False):
            config.set_serve_as_relay(True)
        if getattr(args, "private_key_path", None):
            config.set_private_key_path(args.private_key_path)
    return config


def config_to_dict(config) -> dict:
    data = {
        "bootstraps": config.get_bootstraps(),
        "relays": config.get_relays(),
        "private_key_bytes": len(config.get_private_key()),
    }
    if isinstance(config, NodeConfig):
        data["serve_as_bootstrap"] = config.get_serve_as_bootstrap()
        data["serve_as_relay"] = config.get_serve_as_relay()
        data["private_key_path"] = config.get_private_key_path()
    return data


def cmd_show(args: argparse.Namespace) -> None:
    config = build_config(args)
    print(json.dumps(config_to_dict(config), indent=2))


def cmd_check(args: argparse.Namespace) -> None:
    build_config(args)
    print("ok")


def cmd_keygen(args: argparse.Namespace) -> None:
    config = build_config(args)
    if isinstance(config, NodeConfig) and not config.get_private_key_path():
        raise SystemExit("no private key path available, pass --private-key-path")
    key = keystore.load_or_create_signing_key(config)
    if isinstance(config, NodeConfig):
        print(f"Private key: {config.get_private_key_path()}")
    print(f"Public key: {keystore.encode_public_key(key)}")


def _add_peer_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--bootstrap", action="append", metavar="ADDR", help="Bootstrap peer address")
    parser.add_argument("--relay", action="append", metavar="ADDR", help="Relay peer address")


def _add_node_arguments(parser: argparse.ArgumentParser) -> None:
    if platform_utils.IS_RESTRICTED:
        return
    parser.add_argument("--serve-as-bootstrap", action="store_true", help="Serve as a bootstrap peer")
    parser.add_argument("--serve-as-relay", action="store_true", help="Serve as a relay peer")
    parser.add_argument("--private-key-path", help="Path of the node private key")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="posemesh", description="Posemesh node configuration")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="Print the effective configuration")
    _add_peer_arguments(p_show)
    _add_node_arguments(p_show)
    p_show.set_defaults(func=cmd_show)

    p_check = sub.add_parser("check", help="Validate peer lists")
    _add_peer_arguments(p_check)
    p_check.set_defaults(func=cmd_check)

    p_keygen = sub.add_parser("keygen", help="Load or create the node key")
    p_keygen.add_argument("--private-key-path", help="Path of the node private key")
    p_keygen.set_defaults(func=cmd_keygen)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).debug("platform: %s", platform_utils.get_platform_info())
    args.func(args)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()

__all__ = ["main", "build_parser", "build_config", "config_to_dict"]
