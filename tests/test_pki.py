from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives import serialization

from certinfo.common.errors import BadCertError
from certinfo.crypto.pki import (
    certificate_from_x509,
    is_request_pem,
    load_certificate,
    load_certificate_from_bytes,
    load_certificate_request,
    load_certificate_request_from_bytes,
)
from certinfo.render import oids

from conftest import build_certificate


def test_certificate_fields(rsa_leaf):
    cert = certificate_from_x509(rsa_leaf)

    assert cert.version == 3
    assert cert.serial_number == 0x1000
    assert cert.signature_algorithm.oid == "1.2.840.113549.1.1.11"
    assert cert.tbs_signature_algorithm == cert.signature_algorithm
    assert cert.subject.common_name == "leaf.example.com"
    assert [(a.oid, a.value) for a in cert.issuer.attributes] == [
        ("2.5.4.3", "Example Root"),
        ("2.5.4.10", "Example"),
    ]
    assert cert.validity.not_before == datetime(2020, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert cert.public_key.algorithm.oid == oids.RSA_ENCRYPTION
    assert [(e.oid, e.critical) for e in cert.extensions] == [
        ("2.5.29.19", True),
        ("2.5.29.15", True),
        ("2.5.29.17", False),
    ]
    assert cert.signature_value == rsa_leaf.signature
    assert cert.issuer_unique_id is None


def test_ec_key_parameters_are_kept(ec_key):
    cert = certificate_from_x509(build_certificate(ec_key))
    # DER OID prime256v1
    assert cert.public_key.algorithm.parameters == b"\x06\x08\x2a\x86\x48\xce\x3d\x03\x01\x07"
    assert cert.public_key.key_bytes[:1] == b"\x04"


def test_high_bit_serial(rsa_key):
    cert = certificate_from_x509(build_certificate(rsa_key, serial=0x80 << 64))
    assert cert.serial_number == 0x80 << 64


def test_load_pem_and_der(rsa_leaf, tmp_path):
    pem = rsa_leaf.public_bytes(serialization.Encoding.PEM)
    der = rsa_leaf.public_bytes(serialization.Encoding.DER)
    (tmp_path / "leaf.der").write_bytes(der)

    assert load_certificate_from_bytes(pem) == load_certificate_from_bytes(der)
    assert load_certificate(tmp_path / "leaf.der").serial_number == 0x1000


def test_load_request(ed25519_request, pem_file):
    path = pem_file(ed25519_request, "req.pem")
    csr = load_certificate_request(path)

    assert csr.version == 1
    assert csr.subject.common_name == "req.example.com"
    assert csr.public_key.algorithm.oid == oids.ED25519
    assert {a.oid for a in csr.attributes} == {oids.CHALLENGE_PASSWORD, oids.EXTENSION_REQUEST}
    assert csr.signature_value == ed25519_request.signature


def test_request_pem_detection(ed25519_request, rsa_leaf):
    assert is_request_pem(ed25519_request.public_bytes(serialization.Encoding.PEM))
    assert not is_request_pem(rsa_leaf.public_bytes(serialization.Encoding.PEM))
    assert not is_request_pem(ed25519_request.public_bytes(serialization.Encoding.DER))


def test_garbage_raises():
    with pytest.raises(BadCertError):
        load_certificate_from_bytes(b"not a certificate")
    with pytest.raises(BadCertError):
        load_certificate_request_from_bytes(b"-----BEGIN CERTIFICATE REQUEST-----\nxx\n")


def test_missing_file_raises(tmp_path):
    with pytest.raises(BadCertError, match="Failed to load"):
        load_certificate(tmp_path / "missing.pem")
    with pytest.raises(BadCertError):
        load_certificate_request(tmp_path / "missing.csr")
