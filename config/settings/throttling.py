from config.env import env

# Per client IP, on the anonymous registration endpoint
REGISTRATION_THROTTLE_RATE = env("REGISTRATION_THROTTLE_RATE", default="30/min")
