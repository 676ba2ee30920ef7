from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 3000)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "127.0.0.1")
OPEN_BROWSER = config.get("OPEN_BROWSER", False)

# Timeout configuration for upstream calls
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 60.0)

# X (Twitter) OAuth 2.0 configuration (hardcoded - not user configurable)
AUTHORIZE_URL = "https://twitter.com/i/oauth2/authorize"
TOKEN_URL = "https://api.twitter.com/2/oauth2/token"
API_BASE = "https://api.twitter.com/2"
SCOPES = ["tweet.read", "tweet.write", "users.read", "offline.access"]

# Fixed redirect URI registered with the X developer app
CALLBACK_URL = config.get("CALLBACK_URL", f"http://localhost:{PORT}/callback")

# Required credentials (checked at startup, see bootstrap.py)
CLIENT_ID_VAR = "TWITTER_CLIENT_ID"
CLIENT_SECRET_VAR = "TWITTER_CLIENT_SECRET"
GEMINI_API_KEY_VAR = "GEMINI_API_KEY"
REFRESH_TOKEN_VAR = "TWITTER_REFRESH_TOKEN"

# Gemini configuration
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = config.get("GEMINI_MODEL", "gemini-2.0-flash")
POST_PROMPT = config.get(
    "POST_PROMPT",
    "Write a single, concise tweet (under 280 characters) for #techtwitter. "
    "Do not include options, explanations, or formatting. Just the tweet text.",
)

# Platform limit on post length
MAX_POST_LENGTH = 280

# Token storage
TOKEN_FILE = config.get("TOKEN_FILE", "~/.gemini-tweet-bot/tokens.json")
TOKEN_RECORD_KEY = config.get("TOKEN_RECORD_KEY", "default")
