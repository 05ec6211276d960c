"""Shared fixtures: keys, cryptography-built certificates and requests."""

import logging
from datetime import datetime

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.x509.oid import AttributeOID, NameOID

from certinfo.common.models import (
    AlgorithmIdentifier,
    Certificate,
    DistinguishedName,
    Extension,
    NameAttribute,
    PublicKeyInfo,
    Validity,
)


NOT_BEFORE = datetime(2020, 1, 2, 15, 4, 5)
NOT_AFTER = datetime(2030, 1, 2, 15, 4, 5)

# Fixed seed so Ed25519 certificates are byte-for-byte reproducible
ED25519_SEED = bytes(range(32))

SHA256_RSA = "1.2.840.113549.1.1.11"
RSA_ENCRYPTION = "1.2.840.113549.1.1.1"


def make_name(cn, org=None):
    attrs = [x509.NameAttribute(NameOID.COMMON_NAME, cn)]
    if org:
        attrs.append(x509.NameAttribute(NameOID.ORGANIZATION_NAME, org))
    return x509.Name(attrs)


def _hash_for(key):
    if isinstance(key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
        return None
    return hashes.SHA256()


def wrap_hex(data, indent, width):
    lines = []
    for start in range(0, len(data), width):
        chunk = ":".join("%02x" % b for b in data[start:start + width])
        if start + width < len(data):
            chunk += ":"
        lines.append(" " * indent + chunk)
    return lines


def build_certificate(key, cn="leaf.example.com", issuer_cn="Example Root", sans=None,
                      ca=False, serial=0x1000, extra_extensions=(), subject_key=None):
    """Sign a certificate with `key`; the subject key defaults to the same key."""
    builder = (
        x509.CertificateBuilder()
        .subject_name(make_name(cn))
        .issuer_name(make_name(issuer_cn, "Example"))
        .public_key((subject_key or key).public_key())
        .serial_number(serial)
        .not_valid_before(NOT_BEFORE)
        .not_valid_after(NOT_AFTER)
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=False,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=ca,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
    )
    if sans:
        builder = builder.add_extension(
            x509.SubjectAlternativeName([x509.DNSName(name) for name in sans]),
            critical=False,
        )
    for ext, critical in extra_extensions:
        builder = builder.add_extension(ext, critical=critical)
    return builder.sign(key, _hash_for(key))


def build_request(key, cn="req.example.com", sans=None, challenge=None):
    builder = x509.CertificateSigningRequestBuilder().subject_name(make_name(cn, "Example"))
    if sans:
        builder = builder.add_extension(
            x509.SubjectAlternativeName([x509.DNSName(name) for name in sans]),
            critical=False,
        )
    if challenge:
        builder = builder.add_attribute(AttributeOID.CHALLENGE_PASSWORD, challenge)
    return builder.sign(key, _hash_for(key))


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def dsa_key():
    return dsa.generate_private_key(key_size=2048)


@pytest.fixture(scope="session")
def ed25519_key():
    return ed25519.Ed25519PrivateKey.from_private_bytes(ED25519_SEED)


@pytest.fixture
def rsa_leaf(rsa_key):
    return build_certificate(rsa_key, sans=["leaf.example.com"])


@pytest.fixture
def ed25519_leaf(ed25519_key):
    return build_certificate(ed25519_key, sans=["leaf.example.com"])


@pytest.fixture
def ed25519_request(ed25519_key):
    return build_request(ed25519_key, sans=["req.example.com", "alt.example.com"], challenge=b"secret")


@pytest.fixture
def pem_file(tmp_path):
    """Write a cryptography certificate or CSR to disk as PEM."""
    def write(obj, name="cert.pem"):
        path = tmp_path / name
        path.write_bytes(obj.public_bytes(serialization.Encoding.PEM))
        return path
    return write


# 16-byte modulus with the top bit set: prints with a 00 pad, 17 bytes
MODULUS = int.from_bytes(bytes(range(0x80, 0x90)), "big")
# DER RSAPublicKey { MODULUS, 65537 }
RSA_KEY_DER = (
    b"\x30\x18"
    b"\x02\x11\x00" + bytes(range(0x80, 0x90))
    + b"\x02\x03\x01\x00\x01"
)

BASIC_CONSTRAINTS_LEAF = b"\x30\x00"
BASIC_CONSTRAINTS_CA = b"\x30\x03\x01\x01\xff"
# GeneralNames [ dNSName "leaf.example.com" ]
SAN_LEAF = b"\x30\x12\x82\x10leaf.example.com"


def dn(*pairs):
    return DistinguishedName(attributes=[NameAttribute(oid=oid, value=value) for oid, value in pairs])


@pytest.fixture
def make_cert():
    """Factory for hand-built certificate models with overridable fields."""
    def factory(**overrides):
        fields = dict(
            version=3,
            serial_number=4096,
            signature_algorithm=AlgorithmIdentifier(oid=SHA256_RSA, parameters=b"\x05\x00"),
            tbs_signature_algorithm=AlgorithmIdentifier(oid=SHA256_RSA, parameters=b"\x05\x00"),
            issuer=dn(("2.5.4.6", "US"), ("2.5.4.10", "Example"), ("2.5.4.3", "Example Root")),
            validity=Validity(not_before=datetime(2020, 1, 2, 15, 4, 5),
                              not_after=datetime(2030, 12, 31, 23, 59, 59)),
            subject=dn(("2.5.4.3", "leaf.example.com")),
            public_key=PublicKeyInfo(
                algorithm=AlgorithmIdentifier(oid=RSA_ENCRYPTION, parameters=b"\x05\x00"),
                key_bytes=RSA_KEY_DER,
            ),
            extensions=[
                Extension(oid="2.5.29.19", critical=True, value=BASIC_CONSTRAINTS_LEAF),
                Extension(oid="2.5.29.17", value=SAN_LEAF),
            ],
            signature_value=bytes(range(20)),
        )
        fields.update(overrides)
        return Certificate(**fields)
    return factory


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
