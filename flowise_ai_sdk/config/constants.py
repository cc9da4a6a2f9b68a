"""
Flowise endpoint and default constants.

All REST paths used by the SDK live here so deployments that proxy Flowise
under a different prefix only have to change one module.
"""

# Environment variables read by FlowiseClientOptions.from_env()
BASE_URL_ENV_VAR = "FLOWISE_BASE_URL"
API_KEY_ENV_VAR = "FLOWISE_API_KEY"
TIMEOUT_ENV_VAR = "FLOWISE_TIMEOUT"

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT_SECONDS = 30.0

PROVIDER_NAME = "flowise"
MODEL_ID = "flowise-chatflow"

# Prediction endpoints
PREDICTION_PATH = "/api/v1/prediction/{chatflow_id}"
CHATFLOW_STREAMING_PATH = "/api/v1/chatflows-streaming/{chatflow_id}"

# Upload config endpoints, in resolution priority order
CHATFLOW_PATH = "/api/v1/chatflows/{chatflow_id}"
PUBLIC_CHATBOT_CONFIG_PATH = "/api/v1/public-chatbotConfig/{chatflow_id}"
CHATFLOW_UPLOADS_PATH = "/api/v1/chatflows-uploads/{chatflow_id}"

# Full-file extraction endpoint
ATTACHMENTS_PATH = "/api/v1/attachments/{chatflow_id}/{chat_id}"

DEFAULT_MEDIA_TYPE = "application/octet-stream"
DEFAULT_FILE_NAME = "file"

# Heuristic tokens-per-word ratio, expressed as a fraction to keep estimates exact
TOKENS_PER_WORD_NUMERATOR = 13
TOKENS_PER_WORD_DENOMINATOR = 10

SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"
