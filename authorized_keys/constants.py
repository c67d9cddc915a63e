# authorized_keys/constants.py

ECDSA_SHA2_NISTP256 = "ecdsa-sha2-nistp256"
ECDSA_SHA2_NISTP384 = "ecdsa-sha2-nistp384"
ECDSA_SHA2_NISTP521 = "ecdsa-sha2-nistp521"
SSH_ED25519 = "ssh-ed25519"
SSH_DSS = "ssh-dss"
SSH_RSA = "ssh-rsa"

# order matters: KeyType enumerates in this order
KEY_TYPE_NAMES = (
    ECDSA_SHA2_NISTP256,
    ECDSA_SHA2_NISTP384,
    ECDSA_SHA2_NISTP521,
    SSH_ED25519,
    SSH_DSS,
    SSH_RSA,
)

DEFAULT_KEY_TYPE = SSH_RSA

# --------- Grammar characters ----------
WHITESPACE = " \t"
OPTION_SEPARATOR = ","
VALUE_SEPARATOR = "="
QUOTE = '"'
ESCAPE = "\\"
COMMENT_CHAR = "#"
BASE64_PAD = "="

# --------- Environment ----------
ENV_LOG_LEVEL = "AUTHKEYS_LOG_LEVEL"
ENV_STRICT_BASE64 = "AUTHKEYS_STRICT_BASE64"
DEFAULT_LOG_LEVEL = "WARNING"
