"""Static OID name tables (OpenSSL display names)."""

from types import MappingProxyType

from cryptography.x509.oid import (
    AuthorityInformationAccessOID,
    CertificatePoliciesOID,
    ExtendedKeyUsageOID,
    ExtensionOID,
    NameOID,
    SignatureAlgorithmOID,
    SubjectInformationAccessOID,
)


# Public key algorithms
RSA_ENCRYPTION = "1.2.840.113549.1.1.1"
RSASSA_PSS = SignatureAlgorithmOID.RSASSA_PSS.dotted_string
EC_PUBLIC_KEY = "1.2.840.10045.2.1"
DSA = "1.2.840.10040.4.1"
X25519 = "1.3.101.110"
X448 = "1.3.101.111"
ED25519 = SignatureAlgorithmOID.ED25519.dotted_string
ED448 = SignatureAlgorithmOID.ED448.dotted_string

# Extensions without a cryptography constant
NETSCAPE_COMMENT = "2.16.840.1.113730.1.13"
NETSCAPE_CERT_TYPE = "2.16.840.1.113730.1.1"

# CSR attributes
EXTENSION_REQUEST = "1.2.840.113549.1.9.14"
MS_EXTENSION_REQUEST = "1.3.6.1.4.1.311.2.1.14"
CHALLENGE_PASSWORD = "1.2.840.113549.1.9.7"
UNSTRUCTURED_NAME = NameOID.UNSTRUCTURED_NAME.dotted_string


# Short labels used inside distinguished names
NAME_ATTRIBUTE_LABELS = MappingProxyType({
    NameOID.COMMON_NAME.dotted_string: "CN",
    NameOID.SURNAME.dotted_string: "SN",
    NameOID.SERIAL_NUMBER.dotted_string: "serialNumber",
    NameOID.COUNTRY_NAME.dotted_string: "C",
    NameOID.LOCALITY_NAME.dotted_string: "L",
    NameOID.STATE_OR_PROVINCE_NAME.dotted_string: "ST",
    NameOID.STREET_ADDRESS.dotted_string: "street",
    NameOID.ORGANIZATION_NAME.dotted_string: "O",
    NameOID.ORGANIZATIONAL_UNIT_NAME.dotted_string: "OU",
    NameOID.TITLE.dotted_string: "title",
    NameOID.BUSINESS_CATEGORY.dotted_string: "businessCategory",
    NameOID.POSTAL_CODE.dotted_string: "postalCode",
    NameOID.GIVEN_NAME.dotted_string: "GN",
    "2.5.4.43": "initials",
    NameOID.GENERATION_QUALIFIER.dotted_string: "generationQualifier",
    NameOID.DN_QUALIFIER.dotted_string: "dnQualifier",
    NameOID.PSEUDONYM.dotted_string: "pseudonym",
    NameOID.EMAIL_ADDRESS.dotted_string: "emailAddress",
    NameOID.DOMAIN_COMPONENT.dotted_string: "DC",
    NameOID.USER_ID.dotted_string: "UID",
    NameOID.JURISDICTION_COUNTRY_NAME.dotted_string: "jurisdictionC",
    NameOID.JURISDICTION_STATE_OR_PROVINCE_NAME.dotted_string: "jurisdictionST",
    NameOID.JURISDICTION_LOCALITY_NAME.dotted_string: "jurisdictionL",
    NameOID.UNSTRUCTURED_NAME.dotted_string: "unstructuredName",
})


OID_NAMES = MappingProxyType({
    # Signature algorithms
    SignatureAlgorithmOID.RSA_WITH_MD5.dotted_string: "md5WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA1.dotted_string: "sha1WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA224.dotted_string: "sha224WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA256.dotted_string: "sha256WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA384.dotted_string: "sha384WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA512.dotted_string: "sha512WithRSAEncryption",
    RSASSA_PSS: "rsassaPss",
    SignatureAlgorithmOID.ECDSA_WITH_SHA1.dotted_string: "ecdsa-with-SHA1",
    SignatureAlgorithmOID.ECDSA_WITH_SHA224.dotted_string: "ecdsa-with-SHA224",
    SignatureAlgorithmOID.ECDSA_WITH_SHA256.dotted_string: "ecdsa-with-SHA256",
    SignatureAlgorithmOID.ECDSA_WITH_SHA384.dotted_string: "ecdsa-with-SHA384",
    SignatureAlgorithmOID.ECDSA_WITH_SHA512.dotted_string: "ecdsa-with-SHA512",
    SignatureAlgorithmOID.DSA_WITH_SHA1.dotted_string: "dsaWithSHA1",
    SignatureAlgorithmOID.DSA_WITH_SHA224.dotted_string: "dsa_with_SHA224",
    SignatureAlgorithmOID.DSA_WITH_SHA256.dotted_string: "dsa_with_SHA256",
    ED25519: "ED25519",
    ED448: "ED448",

    # Public key algorithms
    RSA_ENCRYPTION: "rsaEncryption",
    EC_PUBLIC_KEY: "id-ecPublicKey",
    DSA: "dsaEncryption",
    X25519: "X25519",
    X448: "X448",

    # Named curves
    "1.2.840.10045.3.1.1": "prime192v1",
    "1.3.132.0.33": "secp224r1",
    "1.2.840.10045.3.1.7": "prime256v1",
    "1.3.132.0.34": "secp384r1",
    "1.3.132.0.35": "secp521r1",
    "1.3.132.0.10": "secp256k1",
    "1.3.36.3.3.2.8.1.1.7": "brainpoolP256r1",
    "1.3.36.3.3.2.8.1.1.11": "brainpoolP384r1",
    "1.3.36.3.3.2.8.1.1.13": "brainpoolP512r1",

    # Extensions
    ExtensionOID.SUBJECT_KEY_IDENTIFIER.dotted_string: "X509v3 Subject Key Identifier",
    ExtensionOID.KEY_USAGE.dotted_string: "X509v3 Key Usage",
    ExtensionOID.SUBJECT_ALTERNATIVE_NAME.dotted_string: "X509v3 Subject Alternative Name",
    ExtensionOID.ISSUER_ALTERNATIVE_NAME.dotted_string: "X509v3 Issuer Alternative Name",
    ExtensionOID.BASIC_CONSTRAINTS.dotted_string: "X509v3 Basic Constraints",
    ExtensionOID.NAME_CONSTRAINTS.dotted_string: "X509v3 Name Constraints",
    ExtensionOID.CRL_DISTRIBUTION_POINTS.dotted_string: "X509v3 CRL Distribution Points",
    ExtensionOID.CERTIFICATE_POLICIES.dotted_string: "X509v3 Certificate Policies",
    ExtensionOID.POLICY_MAPPINGS.dotted_string: "X509v3 Policy Mappings",
    ExtensionOID.AUTHORITY_KEY_IDENTIFIER.dotted_string: "X509v3 Authority Key Identifier",
    ExtensionOID.POLICY_CONSTRAINTS.dotted_string: "X509v3 Policy Constraints",
    ExtensionOID.EXTENDED_KEY_USAGE.dotted_string: "X509v3 Extended Key Usage",
    ExtensionOID.FRESHEST_CRL.dotted_string: "X509v3 Freshest CRL",
    ExtensionOID.INHIBIT_ANY_POLICY.dotted_string: "X509v3 Inhibit Any Policy",
    ExtensionOID.AUTHORITY_INFORMATION_ACCESS.dotted_string: "Authority Information Access",
    ExtensionOID.SUBJECT_INFORMATION_ACCESS.dotted_string: "Subject Information Access",
    ExtensionOID.OCSP_NO_CHECK.dotted_string: "OCSP No Check",
    ExtensionOID.TLS_FEATURE.dotted_string: "TLS Feature",
    ExtensionOID.PRECERT_SIGNED_CERTIFICATE_TIMESTAMPS.dotted_string: "CT Precertificate SCTs",
    ExtensionOID.PRECERT_POISON.dotted_string: "CT Precertificate Poison",
    NETSCAPE_CERT_TYPE: "Netscape Cert Type",
    NETSCAPE_COMMENT: "Netscape Comment",

    # Extended key usages
    ExtendedKeyUsageOID.SERVER_AUTH.dotted_string: "TLS Web Server Authentication",
    ExtendedKeyUsageOID.CLIENT_AUTH.dotted_string: "TLS Web Client Authentication",
    ExtendedKeyUsageOID.CODE_SIGNING.dotted_string: "Code Signing",
    ExtendedKeyUsageOID.EMAIL_PROTECTION.dotted_string: "E-mail Protection",
    "1.3.6.1.5.5.7.3.5": "IPSec End System",
    "1.3.6.1.5.5.7.3.6": "IPSec Tunnel",
    "1.3.6.1.5.5.7.3.7": "IPSec User",
    ExtendedKeyUsageOID.TIME_STAMPING.dotted_string: "Time Stamping",
    ExtendedKeyUsageOID.OCSP_SIGNING.dotted_string: "OCSP Signing",
    ExtendedKeyUsageOID.ANY_EXTENDED_KEY_USAGE.dotted_string: "Any Extended Key Usage",
    "1.3.6.1.4.1.311.10.3.3": "Microsoft Server Gated Crypto",
    "2.16.840.1.113730.4.1": "Netscape Server Gated Crypto",

    # Access methods
    AuthorityInformationAccessOID.OCSP.dotted_string: "OCSP",
    AuthorityInformationAccessOID.CA_ISSUERS.dotted_string: "CA Issuers",
    SubjectInformationAccessOID.CA_REPOSITORY.dotted_string: "CA Repository",

    # Policies and qualifiers
    CertificatePoliciesOID.ANY_POLICY.dotted_string: "X509v3 Any Policy",
    CertificatePoliciesOID.CPS_QUALIFIER.dotted_string: "CPS",
    CertificatePoliciesOID.CPS_USER_NOTICE.dotted_string: "User Notice",

    # CSR attributes
    EXTENSION_REQUEST: "Requested Extensions",
    MS_EXTENSION_REQUEST: "Requested Extensions",
    CHALLENGE_PASSWORD: "challengePassword",
    UNSTRUCTURED_NAME: "unstructuredName",
})


# Named curve OID -> (NIST name, field size in bits)
CURVE_PARAMETERS = MappingProxyType({
    "1.2.840.10045.3.1.1": ("P-192", 192),
    "1.3.132.0.33": ("P-224", 224),
    "1.2.840.10045.3.1.7": ("P-256", 256),
    "1.3.132.0.34": ("P-384", 384),
    "1.3.132.0.35": ("P-521", 521),
    "1.3.132.0.10": (None, 256),
    "1.3.36.3.3.2.8.1.1.7": (None, 256),
    "1.3.36.3.3.2.8.1.1.11": (None, 384),
    "1.3.36.3.3.2.8.1.1.13": (None, 512),
})
