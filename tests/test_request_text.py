import pytest
from cryptography.hazmat.primitives import serialization

from certinfo.common.errors import RenderError
from certinfo.common.models import AlgorithmIdentifier, Attribute, CertificateRequest, PublicKeyInfo
from certinfo.crypto.pki import request_from_x509
from certinfo.render import oids
from certinfo.render.sections import attributes_section
from certinfo.text import certificate_request_text

from conftest import RSA_ENCRYPTION, RSA_KEY_DER, SAN_LEAF, SHA256_RSA, build_request, dn, wrap_hex


def _extension_request(value):
    # Extensions { Extension { subjectAltName, value } }
    ext = b"\x06\x03\x55\x1d\x11\x04" + bytes([len(value)]) + value
    ext = b"\x30" + bytes([len(ext)]) + ext
    return b"\x30" + bytes([len(ext)]) + ext


def _request(**overrides):
    fields = dict(
        subject=dn(("2.5.4.3", "leaf.example.com"), ("2.5.4.10", "Example")),
        public_key=PublicKeyInfo(
            algorithm=AlgorithmIdentifier(oid=RSA_ENCRYPTION, parameters=b"\x05\x00"),
            key_bytes=RSA_KEY_DER,
        ),
        attributes=[
            Attribute(oid=oids.CHALLENGE_PASSWORD, values=[b"\x0c\x06secret"]),
            Attribute(oid=oids.EXTENSION_REQUEST, values=[_extension_request(SAN_LEAF)]),
        ],
        signature_algorithm=AlgorithmIdentifier(oid=SHA256_RSA),
        signature_value=bytes(range(3)),
    )
    fields.update(overrides)
    return CertificateRequest(**fields)


def test_hand_built_request_exact_text():
    assert certificate_request_text(_request()) == """\
Certificate Request:
    Data:
        Version: 1 (0x0)
        Subject: CN=leaf.example.com, O=Example
        Subject Public Key Info:
            Public Key Algorithm: rsaEncryption
                Public-Key: (128 bit)
                Modulus:
                    00:80:81:82:83:84:85:86:87:88:89:8a:8b:8c:8d:
                    8e:8f
                Exponent: 65537 (0x10001)
        Attributes:
            challengePassword: secret
        Requested Extensions:
            X509v3 Subject Alternative Name:
                DNS:leaf.example.com
    Signature Algorithm: sha256WithRSAEncryption
         00:01:02
"""


def test_request_without_attributes_omits_sections():
    text = certificate_request_text(_request(attributes=[]))
    assert "Attributes:" not in text
    assert "Requested Extensions:" not in text


def test_unknown_attribute_type():
    attrs = [Attribute(oid="1.2.3.4", values=[b"\x0c\x01x", b"\x02\x01\x05"])]
    text = certificate_request_text(_request(attributes=attrs))
    assert "            OID.1.2.3.4: x, 5\n" in text


def test_undecodable_extension_request_is_dumped_under_attributes():
    attrs = [Attribute(oid=oids.EXTENSION_REQUEST, values=[b"\x04\x03\xde\xad\xbe"])]
    text = certificate_request_text(_request(attributes=attrs))
    assert (
        "        Attributes:\n"
        "            Requested Extensions:\n"
        "                04:03:de:ad:be\n"
    ) in text
    assert "\n        Requested Extensions:" not in text


def test_undecodable_extension_request_next_to_good_one():
    attrs = [
        Attribute(oid=oids.EXTENSION_REQUEST, values=[b"\x01\x02"]),
        Attribute(oid=oids.MS_EXTENSION_REQUEST, values=[_extension_request(SAN_LEAF)]),
    ]
    assert attributes_section(attrs) == [
        "        Attributes:",
        "            Requested Extensions:",
        "                01:02",
    ]
    text = certificate_request_text(_request(attributes=attrs))
    assert "        Requested Extensions:\n            X509v3 Subject Alternative Name:\n" in text


def test_request_from_loader(ed25519_key, ed25519_request):
    pub = ed25519_key.public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw)
    expected = "\n".join(
        [
            "Certificate Request:",
            "    Data:",
            "        Version: 1 (0x0)",
            "        Subject: CN=req.example.com, O=Example",
            "        Subject Public Key Info:",
            "            Public Key Algorithm: ED25519",
            "                ED25519 Public-Key:",
            "                pub:",
        ]
        + wrap_hex(pub, 20, 15)
        + [
            "        Attributes:",
            "            challengePassword: secret",
            "        Requested Extensions:",
            "            X509v3 Subject Alternative Name:",
            "                DNS:req.example.com, DNS:alt.example.com",
            "    Signature Algorithm: ED25519",
        ]
        + wrap_hex(ed25519_request.signature, 9, 18)
    ) + "\n"
    assert certificate_request_text(request_from_x509(ed25519_request)) == expected


def test_request_missing_key_raises():
    with pytest.raises(RenderError):
        certificate_request_text(_request(public_key=None))


def test_request_rendering_is_idempotent(ec_key):
    csr = request_from_x509(build_request(ec_key))
    assert certificate_request_text(csr) == certificate_request_text(csr)
