"""Application-wide constants.

This module centralizes the fixed values of the Instagram webhook contract
and the defaults used by the configuration layer.
"""

# =============================================================================
# Server
# =============================================================================

# Port used when PORT is not set
DEFAULT_PORT = 3000

DEFAULT_HOST = "0.0.0.0"

# =============================================================================
# Webhook Contract
# =============================================================================

# Platform segment of the webhook path (/webhooks/<platform>)
WEBHOOK_PLATFORM = "instagram"

# hub.mode value sent during the subscription handshake
SUBSCRIBE_MODE = "subscribe"

# Body returned for every accepted POST delivery
EVENT_RECEIVED = "EVENT_RECEIVED"

# Header carrying the HMAC-SHA256 payload signature
SIGNATURE_HEADER = "X-Hub-Signature-256"

SIGNATURE_PREFIX = "sha256="

# =============================================================================
# Instagram API
# =============================================================================

INSTAGRAM_GRAPH_HOST = "graph.instagram.com"

INSTAGRAM_GRAPH_API_VERSION = "v23.0"

# Maximum length of a response body kept in error logs (chars)
MAX_LOGGED_RESPONSE_BODY_CHARS = 500

# =============================================================================
# Replies
# =============================================================================

DEFAULT_REPLY_TEXT = (
    "¡Hola! Gracias por tu mensaje. Soy tu asistente de IAM Smart Marketing. "
    "Mi meta es ayudarte a conseguir más pacientes y agendar una cita contigo. "
    "¿Te gustaría reservar una llamada para conocer nuestros planes?"
)
