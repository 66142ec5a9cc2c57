"""Command-line helper for signing test deliveries."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from formgate.config import SECRET_ENV_VAR
from formgate.signature import SIGNATURE_HEADER, compute_signature, verify_signature


def _read_body(path: Path | None) -> bytes:
    if path is None or str(path) == "-":
        return sys.stdin.buffer.read()
    return path.read_bytes()


def main(argv: list[str] | None = None) -> int:
    """Print the ``Typeform-Signature`` header for a request body.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success (or a matching ``--check``), 1 when the
        secret is missing or ``--check`` does not match.

    """
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument(
        "body",
        type=Path,
        nargs="?",
        default=None,
        help="File containing the exact request body (default: stdin)",
    )
    parser.add_argument(
        "--secret",
        default=None,
        help=f"Signing secret (default: ${SECRET_ENV_VAR})",
    )
    parser.add_argument(
        "--check",
        default=None,
        metavar="SIGNATURE",
        help="Verify SIGNATURE against the body instead of printing one",
    )
    parser.add_argument(
        "--header",
        action="store_true",
        help=f"Print as a '{SIGNATURE_HEADER}: ...' header line",
    )
    args = parser.parse_args(argv)

    secret = args.secret or os.environ.get(SECRET_ENV_VAR, "")
    if not secret.strip():
        print(f"No secret given and {SECRET_ENV_VAR} is not set", file=sys.stderr)
        return 1

    body = _read_body(args.body)

    if args.check is not None:
        if verify_signature(args.check, body, secret):
            print("signature valid")
            return 0
        print("signature mismatch")
        return 1

    signature = compute_signature(body, secret)
    print(f"{SIGNATURE_HEADER}: {signature}" if args.header else signature)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
