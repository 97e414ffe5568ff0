"""CLI entry point for mailredirect."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .compose import alter_message
from .config import AttachmentMode, Config, InlineMode, load_config
from .errors import RedirectError
from .mail import Mail
from .mime import load_message
from .modifier import replace_subject

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("mailredirect")


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (defaults are used when it does not exist)",
    )
    parser.add_argument(
        "--inline",
        type=str,
        choices=[mode.value for mode in InlineMode],
        help="How much of the original to show inline",
    )
    parser.add_argument(
        "--attachment",
        type=str,
        choices=[mode.value for mode in AttachmentMode],
        help="How much of the original to attach",
    )
    parser.add_argument(
        "--attach-error",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Attach the original error message as a 'Reasons' part",
    )
    parser.add_argument(
        "--message",
        type=str,
        help="Text placed before the inline content",
    )
    parser.add_argument(
        "--subject",
        type=str,
        help="Replace the subject of the new message",
    )
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Log the inline and attachment modes used",
    )


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line overrides to the loaded configuration."""
    redirect = config.redirect
    overrides = {}
    if getattr(args, "inline", None):
        overrides["inline"] = InlineMode.parse(args.inline)
    if getattr(args, "attachment", None):
        overrides["attachment"] = AttachmentMode.parse(args.attachment)
    if getattr(args, "attach_error", None) is not None:
        overrides["attach_error"] = args.attach_error
    if getattr(args, "debug", None) is not None:
        overrides["debug"] = args.debug
    if getattr(args, "message", None) is not None:
        overrides["message"] = args.message
    if getattr(args, "subject", None) is not None:
        overrides["subject"] = args.subject
    # Assigned after construction so CLI values win over environment overrides
    for key, value in overrides.items():
        setattr(redirect, key, value)
    return config


def compose_cmd(
    config: Config,
    original_path: Path,
    output_path: Path | None = None,
    error_message: str | None = None,
) -> Mail:
    """Compose a redirect of the message stored in ``original_path``."""
    original = Mail(
        message=load_message(original_path),
        error_message=error_message,
        name=original_path.name,
    )
    target = Mail.new(name=f"{original_path.stem}-redirect")
    logger.debug(f"Composing redirect of '{original.subject or ''}' from {original_path}")

    alter_message(config.to_policy(), original, target)
    replace_subject(target.message, config.redirect.subject)

    data = target.message.as_bytes()
    if output_path:
        output_path.write_bytes(data)
        logger.info(f"Wrote redirected message to {output_path} ({len(data)} bytes)")
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    return target


def show_policy_cmd(config: Config) -> None:
    """Print the effective redirect policy."""
    policy = config.to_policy()
    print(f"{'Inline':<15} {policy.inline_mode.value}")
    print(f"{'Attachment':<15} {policy.attachment_mode.value}")
    print(f"{'Attach error':<15} {'yes' if policy.attach_error else 'no'}")
    print(f"{'Debug':<15} {'yes' if policy.debug else 'no'}")
    print(f"{'Message':<15} {policy.message_text if policy.message_text is not None else '-'}")
    print(f"{'Subject':<15} {config.redirect.subject if config.redirect.subject is not None else '-'}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Compose redirected and bounced messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # compose - Build a redirect of a stored message
    compose_parser = subparsers.add_parser("compose", help="Compose a redirect of an .eml message")
    add_common_args(compose_parser)
    compose_parser.add_argument("original", type=Path, help="Original message (.eml)")
    compose_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Write the new message here instead of stdout",
    )
    compose_parser.add_argument(
        "--error-message",
        type=str,
        help="Error description recorded for the original message",
    )

    # show-policy - Print effective policy
    policy_parser = subparsers.add_parser("show-policy", help="Show the effective redirect policy")
    add_common_args(policy_parser)

    return parser


def load_effective_config(args: argparse.Namespace) -> Config:
    if args.config.exists():
        config = load_config(args.config)
    else:
        logger.debug(f"Configuration file not found, using defaults: {args.config}")
        config = Config()
    return apply_cli_overrides(config, args)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Show help if no command specified
    if not args.command:
        parser.print_help()
        sys.exit(0)

    try:
        config = load_effective_config(args)
        logger.setLevel(config.logging.level.upper())
    except (ValueError, OSError) as e:
        logger.error(f"Invalid configuration {args.config}: {e}")
        sys.exit(1)

    if args.command == "show-policy":
        show_policy_cmd(config)
    elif args.command == "compose":
        if not args.original.exists():
            logger.error(f"Original message not found: {args.original}")
            sys.exit(1)
        try:
            compose_cmd(config, args.original, args.output, args.error_message)
        except RedirectError as e:
            logger.error(f"Failed to compose redirect: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
