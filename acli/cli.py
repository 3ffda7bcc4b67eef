# MIT License © 2025 Motohiro Suzuki
"""
cli.py

acli command line:

  acli csv      -i INPUT [-o OUTPUT] [--format json|yaml] [--no-header] [-d DELIM]
  acli genpass  [-l LENGTH] [--no-uppercase] [--no-lowercase] [--no-number] [--no-symbol]
  acli base64   encode|decode [-i INPUT] [--format standard|urlsafe]
  acli text     sign|verify|generate|encrypt|decrypt ...
  acli jwt      sign|verify ...
  acli http     serve [-d DIR] [-p PORT]

Results go to stdout, diagnostics to the log on stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from acli import __version__
from acli.crypto import keystore
from acli.crypto.sig_backends import KeyFormat
from acli.io_utils import get_content, open_input, read_all, resolve_input, resolve_output_dir
from acli.logging_config import setup_logging
from acli.process import b64, csv_convert, genpass, http_serve, jwt_token, text
from acli.protocol.config import AcliConfig, load_config
from acli.protocol.errors import AcliError, ExitCode, InvalidEncoding
from acli.transport import codec

logger = logging.getLogger(__name__)

VERIFIED_MSG = "✓ Signature verified"
NOT_VERIFIED_MSG = "⚠ Signature not verified"


def _arg_type(parse: Callable):
    """argparse type= adapter: turn our parse errors into argparse usage errors."""
    def _conv(s: str):
        try:
            return parse(s)
        except (AcliError, ValueError) as e:
            raise argparse.ArgumentTypeError(str(e))
    _conv.__name__ = getattr(parse, "__name__", "value")
    return _conv


def _write_stdout(data: bytes) -> None:
    sys.stdout.flush()
    out = getattr(sys.stdout, "buffer", None)
    if out is None:
        sys.stdout.write(data.decode("utf-8", errors="replace"))
    else:
        out.write(data)
    sys.stdout.flush()


# =========================
# csv / genpass / base64
# =========================

def cmd_csv(args: argparse.Namespace, cfg: AcliConfig) -> int:
    output = args.output or f"output.{args.format.value}"
    n = csv_convert.process_csv(args.input, output, args.format, header=args.header, delimiter=args.delimiter)
    logger.info("csv: %d rows -> %s", n, output)
    return ExitCode.OK


def cmd_genpass(args: argparse.Namespace, cfg: AcliConfig) -> int:
    pw = genpass.process_genpass(
        args.length,
        upper=args.uppercase,
        lower=args.lowercase,
        number=args.number,
        symbol=args.symbol,
    )
    print(pw)
    return ExitCode.OK


def cmd_base64_encode(args: argparse.Namespace, cfg: AcliConfig) -> int:
    with open_input(args.input) as reader:
        print(b64.process_encode(reader, args.format))
    return ExitCode.OK


def cmd_base64_decode(args: argparse.Namespace, cfg: AcliConfig) -> int:
    with open_input(args.input) as reader:
        data = b64.process_decode(reader, args.format)
    _write_stdout(data)
    return ExitCode.OK


# =========================
# text
# =========================

def cmd_text_sign(args: argparse.Namespace, cfg: AcliConfig) -> int:
    km = keystore.load(args.key, args.format)
    with open_input(args.input) as reader:
        sig = text.process_text_sign(reader, km.secret, args.format)
    print(codec.encode(sig))
    return ExitCode.OK


def cmd_text_verify(args: argparse.Namespace, cfg: AcliConfig) -> int:
    key = keystore.load_verifying_key(args.key, args.format)
    sig = codec.decode(args.signature)
    with open_input(args.input) as reader:
        ok = text.process_text_verify(reader, key, sig, args.format)
    if ok:
        print(VERIFIED_MSG)
        return ExitCode.OK
    print(NOT_VERIFIED_MSG)
    return ExitCode.NOT_VERIFIED


def cmd_text_generate(args: argparse.Namespace, cfg: AcliConfig) -> int:
    out_dir = resolve_output_dir(args.output_path)
    blobs = text.process_text_key_generate(args.format)
    for name, data in blobs.items():
        p = out_dir / name
        p.write_bytes(data)
        print(p)
    return ExitCode.OK


def cmd_text_encrypt(args: argparse.Namespace, cfg: AcliConfig) -> int:
    key = get_content(args.key)
    with open_input(args.input) as reader:
        framed = text.process_text_encrypt(reader, key, cfg.aead)
    print(codec.encode(framed))
    return ExitCode.OK


def cmd_text_decrypt(args: argparse.Namespace, cfg: AcliConfig) -> int:
    key = get_content(args.key)
    raw = read_all(args.input)
    try:
        encoded = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidEncoding("ciphertext text is not ascii") from e
    pt = text.process_text_decrypt(codec.decode(encoded), key, cfg.aead)
    _write_stdout(pt)
    return ExitCode.OK


# =========================
# jwt / http
# =========================

def cmd_jwt_sign(args: argparse.Namespace, cfg: AcliConfig) -> int:
    exp = jwt_token.parse_exp(args.exp)
    print(jwt_token.process_jwt_encode(args.sub, args.aud, exp, secret=cfg.jwt_secret))
    return ExitCode.OK


def cmd_jwt_verify(args: argparse.Namespace, cfg: AcliConfig) -> int:
    claims = jwt_token.process_jwt_decode(args.token, secret=cfg.jwt_secret)
    print(claims)
    return ExitCode.OK


def cmd_http_serve(args: argparse.Namespace, cfg: AcliConfig) -> int:
    port = cfg.http_port if args.port is None else args.port
    http_serve.process_http_serve(resolve_output_dir(args.dir), port)
    return ExitCode.OK


# =========================
# parser
# =========================

def build_parser() -> argparse.ArgumentParser:
    key_format = _arg_type(KeyFormat.parse)
    input_file = _arg_type(resolve_input)

    p = argparse.ArgumentParser(prog="acli", description="A bundle of command line conveniences.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # csv
    sp = sub.add_parser("csv", help="Show CSV, or convert CSV to other formats")
    sp.add_argument("-i", "--input", required=True, type=input_file)
    sp.add_argument("-o", "--output", help="default: output.<format>")
    sp.add_argument("--format", type=_arg_type(csv_convert.OutputFormat.parse), default=csv_convert.OutputFormat.JSON)
    sp.add_argument("-d", "--delimiter", default=",")
    sp.add_argument("--header", action=argparse.BooleanOptionalAction, default=True)
    sp.set_defaults(func=cmd_csv)

    # genpass
    sp = sub.add_parser("genpass", help="Generate a random password")
    sp.add_argument("-l", "--length", type=int, default=16)
    sp.add_argument("--uppercase", action=argparse.BooleanOptionalAction, default=True)
    sp.add_argument("--lowercase", action=argparse.BooleanOptionalAction, default=True)
    sp.add_argument("--number", action=argparse.BooleanOptionalAction, default=True)
    sp.add_argument("--symbol", action=argparse.BooleanOptionalAction, default=True)
    sp.set_defaults(func=cmd_genpass)

    # base64
    sp = sub.add_parser("base64", help="Base64 encode/decode")
    b64sub = sp.add_subparsers(dest="base64_cmd", required=True)
    for name, func, about in (
        ("encode", cmd_base64_encode, "Encode base64"),
        ("decode", cmd_base64_decode, "Decode base64"),
    ):
        s = b64sub.add_parser(name, help=about)
        s.add_argument("-i", "--input", type=input_file, default="-")
        s.add_argument("--format", type=_arg_type(b64.Base64Format.parse), default=b64.Base64Format.STANDARD)
        s.set_defaults(func=func)

    # text
    sp = sub.add_parser("text", help="Text sign/verify/encrypt/decrypt")
    tsub = sp.add_subparsers(dest="text_cmd", required=True)

    s = tsub.add_parser("sign", help="Sign a text with a private/shared key")
    s.add_argument("-i", "--input", type=input_file, default="-")
    s.add_argument("-k", "--key", required=True, type=input_file)
    s.add_argument("--format", type=key_format, default=KeyFormat.BLAKE3)
    s.set_defaults(func=cmd_text_sign)

    s = tsub.add_parser("verify", help="Verify a signature")
    s.add_argument("-i", "--input", type=input_file, default="-")
    s.add_argument("-k", "--key", required=True, type=input_file)
    s.add_argument("-s", "--signature", required=True)
    s.add_argument("--format", type=key_format, default=KeyFormat.BLAKE3)
    s.set_defaults(func=cmd_text_verify)

    s = tsub.add_parser("generate", help="Generate a key (blake3) or key pair (ed25519)")
    s.add_argument("-f", "--format", type=key_format, required=True)
    s.add_argument("-o", "--output-path", required=True)
    s.set_defaults(func=cmd_text_generate)

    s = tsub.add_parser("encrypt", help="Encrypt a text; prints url-safe base64")
    s.add_argument("-i", "--input", type=input_file, default="-")
    s.add_argument("-k", "--key", required=True, type=input_file)
    s.set_defaults(func=cmd_text_encrypt)

    s = tsub.add_parser("decrypt", help="Decrypt url-safe base64 ciphertext text")
    s.add_argument("-i", "--input", type=input_file, default="-")
    s.add_argument("-k", "--key", required=True, type=input_file)
    s.set_defaults(func=cmd_text_decrypt)

    # jwt
    sp = sub.add_parser("jwt", help="JWT sign/verify")
    jsub = sp.add_subparsers(dest="jwt_cmd", required=True)

    s = jsub.add_parser("sign", help="Issue an HS256 token")
    s.add_argument("-s", "--sub", required=True)
    s.add_argument("-a", "--aud", required=True)
    s.add_argument("-e", "--exp", required=True, help="UNIX seconds, or a duration like 14d / 2h / 30m")
    s.set_defaults(func=cmd_jwt_sign)

    s = jsub.add_parser("verify", help="Verify a token and print its claims")
    s.add_argument("-t", "--token", required=True)
    s.set_defaults(func=cmd_jwt_verify)

    # http
    sp = sub.add_parser("http", help="HTTP server")
    hsub = sp.add_subparsers(dest="http_cmd", required=True)
    s = hsub.add_parser("serve", help="Serve a directory over HTTP")
    s.add_argument("-d", "--dir", default=".")
    s.add_argument("-p", "--port", type=int, default=None)
    s.set_defaults(func=cmd_http_serve)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        cfg = load_config()
        if not args.verbose:
            setup_logging(cfg.log_level)
        return int(args.func(args, cfg))
    except AcliError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return int(ExitCode.from_error(e))
    except ValueError as e:
        # genpass / config errors
        logger.error("%s", e)
        return int(ExitCode.INTERNAL)


def run() -> None:
    sys.exit(main())
