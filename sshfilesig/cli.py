#!/usr/bin/env python3
"""
CLI for sshfilesig: sign and verify files with SSH keys.
"""

import os
import sys
import argparse
import logging
from pathlib import Path

from . import (
    dearmor,
    generate_private_key,
    parse_private_key,
    sign,
    verify,
    PublicKey,
    Signature,
    SSHSigError,
)


logger = logging.getLogger("sshfilesig")

DEFAULT_KEY_PATH = os.path.expanduser("~/.ssh/id_ed25519")


def default_key_path():
    """Signing key from $SSHSIG_KEY, falling back to ~/.ssh/id_ed25519."""
    return os.environ.get("SSHSIG_KEY") or DEFAULT_KEY_PATH


def setup_logging(verbose=False, debug=False):
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(ch)
    for handler in logger.handlers:
        handler.setLevel(level)


def cmd_sign(args):
    """Sign a file."""
    key_path = os.path.expanduser(args.key or default_key_path())
    if not os.path.exists(key_path):
        print(f"Error: Key not found: {key_path}", file=sys.stderr)
        return 1

    try:
        with open(key_path, 'r') as f:
            private_key = f.read()
        passphrase = os.environ.get("SSHSIG_PASSPHRASE")

        logger.info("Signing %s with key %s", args.file, key_path)
        if args.file == "-":
            signature = sign(private_key, sys.stdin.buffer, passphrase=passphrase)
        else:
            with open(args.file, 'rb') as f:
                signature = sign(private_key, f, passphrase=passphrase)

        output = args.output or ("-" if args.file == "-" else f"{args.file}.sig")
        if output == "-":
            sys.stdout.write(signature.decode("ascii"))
        else:
            Path(output).write_bytes(signature)
            print(f"Write signature to {output}")
        return 0

    except (OSError, SSHSigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_verify(args):
    """Verify a file against its signature."""
    sig_path = args.signature or f"{args.file}.sig"
    if not os.path.exists(sig_path):
        print(f"Error: Signature not found: {sig_path}", file=sys.stderr)
        return 1

    try:
        expected_key = None
        if args.public_key:
            expected_key = PublicKey.from_authorized_key(Path(args.public_key).read_text())

        armored = Path(sig_path).read_bytes()
        if args.file == "-":
            key = verify(armored, sys.stdin.buffer, args.namespace, expected_key)
        else:
            with open(args.file, 'rb') as f:
                key = verify(armored, f, args.namespace, expected_key)

        print(f'Good "{args.namespace}" signature with {key.type()} key {key.fingerprint()}')
        return 0

    except (OSError, SSHSigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_inspect(args):
    """Inspect a signature without verifying it."""
    if not os.path.exists(args.signature):
        print(f"Error: Signature not found: {args.signature}", file=sys.stderr)
        return 1

    try:
        wrapped = dearmor(Path(args.signature).read_bytes())
        key = PublicKey.from_wire(wrapped.public_key)
        sig = Signature.unmarshal(wrapped.signature)

        print(f"Version: {wrapped.version}")
        print(f"Key: {key.type()} {key.fingerprint()}")
        print(f"Namespace: {wrapped.namespace}")
        print(f"Hash: {wrapped.hash_algorithm}")
        print(f"Signature: {sig.format}")
        return 0

    except (OSError, ValueError, SSHSigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_keygen(args):
    """Generate a new SSH keypair."""
    output_path = os.path.expanduser(args.output)

    # Don't overwrite existing keys
    if os.path.exists(output_path):
        print(f"Error: Key already exists: {output_path}", file=sys.stderr)
        return 1

    try:
        private_key = generate_private_key(args.type, args.bits)
        public_key = parse_private_key(private_key).public_key()

        fd = os.open(output_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, 'w') as f:
            f.write(private_key)
        with open(f"{output_path}.pub", 'w') as f:
            f.write(public_key.authorized_key(args.comment) + "\n")

        print(f"✓ Generated {output_path} ({public_key.fingerprint()})")
        print(f"Private key: {output_path}")
        print(f"Public key:  {output_path}.pub")
        return 0

    except (OSError, ValueError, SSHSigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sshfilesig",
        description="Sign and verify files with SSH keys (SSHSIG format)"
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Be a bit more verbose')
    parser.add_argument('-d', '--debug', action='store_true', help='Show debugging output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # sshfilesig sign
    sign_parser = subparsers.add_parser('sign', help='Sign a file')
    sign_parser.add_argument('file', help='File to sign, or - for stdin')
    sign_parser.add_argument('--key', help=f'Path to SSH private key (default: $SSHSIG_KEY or {DEFAULT_KEY_PATH})')
    sign_parser.add_argument('--output', '-o', help='Signature output path (default: FILE.sig, - for stdout)')
    sign_parser.set_defaults(func=cmd_sign)

    # sshfilesig verify
    verify_parser = subparsers.add_parser('verify', help='Verify a signed file')
    verify_parser.add_argument('file', help='File that was signed, or - for stdin')
    verify_parser.add_argument('--signature', '-s', help='Signature path (default: FILE.sig)')
    verify_parser.add_argument('--public-key', '-k', help='Require a signature from this public key')
    verify_parser.add_argument('--namespace', '-n', default='file', help='Signature namespace (default: file)')
    verify_parser.set_defaults(func=cmd_verify)

    # sshfilesig inspect
    inspect_parser = subparsers.add_parser('inspect', help='Show signature details')
    inspect_parser.add_argument('signature', help='Path to armored signature')
    inspect_parser.set_defaults(func=cmd_inspect)

    # sshfilesig keygen
    keygen_parser = subparsers.add_parser('keygen', help='Generate SSH keypair')
    keygen_parser.add_argument('--output', required=True, help='Output path for private key')
    keygen_parser.add_argument('--type', '-t', default='ed25519', choices=['ed25519', 'rsa', 'ecdsa'],
                               help='Key type (default: ed25519)')
    keygen_parser.add_argument('--bits', '-b', type=int, help='Key size')
    keygen_parser.add_argument('--comment', '-C', default='sshfilesig-key', help='Key comment (default: sshfilesig-key)')
    keygen_parser.set_defaults(func=cmd_keygen)

    # Parse and execute
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
