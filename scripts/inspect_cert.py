"""Inspect X.509 certificates and CSRs - alternative to openssl x509/req -text -noout."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path
script_dir = Path(__file__).parent
project_root = script_dir.parent
sys.path.insert(0, str(project_root))

from certinfo.common.errors import CertInfoError
from certinfo.common.logger import configure_logging, get_logger
from certinfo.config import TextConfig
from certinfo.crypto.pki import (
    is_request_pem,
    load_certificate_from_bytes,
    load_certificate_request_from_bytes,
)
from certinfo.text import (
    certificate_request_short_text,
    certificate_request_text,
    certificate_short_text,
    certificate_text,
)


logger = get_logger(__name__)


def inspect_file(path: Path, short: bool = False, request: bool = False,
                 config: Optional[TextConfig] = None) -> str:
    """
    Load a certificate or CSR and render its report.

    Args:
        path: PEM or DER file
        short: Render the short form instead of the long one
        request: Treat the input as a CSR (PEM armour is detected anyway)
        config: Runtime settings

    Returns:
        Report text

    Raises:
        CertInfoError: If the file cannot be loaded or rendered
    """
    config = config or TextConfig()
    try:
        data = path.read_bytes()
    except OSError as e:
        raise CertInfoError(f"Failed to read {path}: {e}")

    if request or is_request_pem(data):
        csr = load_certificate_request_from_bytes(data)
        logger.info("inspect.request", path=str(path), short=short)
        if short:
            return certificate_request_short_text(csr)
        return certificate_request_text(csr, config.layout)

    cert = load_certificate_from_bytes(data)
    logger.info("inspect.certificate", path=str(path), short=short)
    if short:
        return certificate_short_text(cert)
    return certificate_text(cert, config.layout)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Inspect X.509 certificate or certificate request")
    parser.add_argument(
        "cert_path",
        type=str,
        help="Path to certificate or CSR file (PEM or DER format)"
    )
    parser.add_argument("--short", action="store_true", help="Print the short summary")
    parser.add_argument("--request", action="store_true", help="Input is a certificate request")
    args = parser.parse_args(argv)

    config = TextConfig.from_env()
    configure_logging(config.log_level, config.log_format)

    cert_path = Path(args.cert_path)
    if not cert_path.exists():
        print(f"ERROR: File not found: {cert_path}")
        sys.exit(1)

    try:
        text = inspect_file(cert_path, short=args.short, request=args.request, config=config)
    except CertInfoError as e:
        logger.error("inspect.failed", path=str(cert_path), error=str(e))
        print(f"ERROR: {e}")
        sys.exit(1)
    sys.stdout.write(text)


if __name__ == "__main__":
    main()
