class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    RECOGNIZE = V1 + "/recognize"
    HEALTHZ = "/healthz"


class ExternalURIs:
    WIT_MESSAGE = "/message"


# 3 hours; used when no valid expire value is configured.
DEFAULT_CACHE_EXPIRE_SECONDS = 3 * 3600

# Reserved Wit.ai entity label that carries the intent.
INTENT_LABEL = "intent"

# Intent reported when Wit.ai found entities but no intent.
NONE_INTENT = "none"

# Weak-but-real signal so dialog routing does not fall back to the default handler.
NONE_INTENT_SCORE = 0.1
