from config.env import env, env_get

# Synapse-style registration endpoint, e.g. https://hs.example.org/_matrix/client/r0/admin/register
HOMESERVER_REGISTER_URL = env("HOMESERVER_REGISTER_URL", default="")
# Application service token, sent as ?access_token=
HOMESERVER_AS_TOKEN = env_get("HOMESERVER_AS_TOKEN", default="")

# Bounded wait for the identity server's response (seconds)
HOMESERVER_TIMEOUT = env.float("HOMESERVER_TIMEOUT", default=30.0)
HOMESERVER_MAX_IDLE_CONNS_PER_HOST = env.int("HOMESERVER_MAX_IDLE_CONNS_PER_HOST", default=100)
