__all__ = [
    # Errors
    "DecodeError",
    "CryptoError",
    "SigningError",
    "MissingEventError",
    "SchemaValidationError",
    # SCALE
    "compact_encode",
    "compact_decode",
    # Extensions
    "ChainMetadata",
    "ExtensionPayload",
    "TX_EXTENSIONS",
    "build_extension_payload",
    "signing_payload",
    # Signing
    "SIGNING_HASH_THRESHOLD",
    "Keypair",
    "sign_payload",
    "signing_message",
    "verify_payload_signature",
    "Sr25519Keypair",
    "get_keypair",
    "load_mnemonic",
    # SS58
    "ss58_encode",
    "ss58_decode",
    # Extrinsics
    "ParsedExtrinsic",
    "build_signed_extrinsic",
    "build_extrinsic_from_response",
    "parse_extrinsic",
    # Events
    "ChainEvent",
    "parse_agent_registered_event",
    "parse_agent_call_queued_event",
    "require_event",
    # Service payloads
    "BuildExtrinsicResponse",
    "SubmitResponse",
    "SchemaRegistry",
]

from .utils import DecodeError
from .pneuma.scale import compact_decode, compact_encode
from .pneuma.extensions import (
    TX_EXTENSIONS,
    ChainMetadata,
    ExtensionPayload,
    build_extension_payload,
    signing_payload,
)
from .sigil.crypto import (
    SIGNING_HASH_THRESHOLD,
    CryptoError,
    Keypair,
    SigningError,
    sign_payload,
    signing_message,
    verify_payload_signature,
)
from .sigil.keys import Sr25519Keypair, get_keypair, load_mnemonic
from .sigil.ss58 import ss58_decode, ss58_encode
from .pneuma.extrinsic import (
    ParsedExtrinsic,
    build_extrinsic_from_response,
    build_signed_extrinsic,
    parse_extrinsic,
)
from .pneuma.events import (
    ChainEvent,
    MissingEventError,
    parse_agent_call_queued_event,
    parse_agent_registered_event,
    require_event,
)
from .schema.models import BuildExtrinsicResponse, SubmitResponse
from .schema.schemas import SchemaRegistry, SchemaValidationError
