# utils/messages.py
# Backend messages are passed to the user verbatim except for these two,
# which get a friendlier wording.
EMAIL_TAKEN = "Email already registered"
INVALID_CREDENTIALS = "Invalid login credentials"

FRIENDLY_MESSAGES = {
    EMAIL_TAKEN: "This email is already in use. Try signing in.",
    INVALID_CREDENTIALS: "Incorrect email or password.",
}

def friendly(message: str) -> str:
    for raw, nice in FRIENDLY_MESSAGES.items():
        if raw.lower() in (message or "").lower():
            return nice
    return message
