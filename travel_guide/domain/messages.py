"""Fixed user-visible sentences.

These are part of the public contract: front-ends and tests compare
against them verbatim.
"""

NO_MATCH_REPLY = (
    "Sorry, that information is not available. I can only help with places "
    "and destinations in my knowledge base. Try asking about popular tourist "
    "spots, temples, monuments, or specific cities in India!"
)

SERVICE_APOLOGY = (
    "Sorry, I encountered an error processing your request. Please try again."
)

# Sentence the external model is instructed to emit when out of scope
MODEL_REFUSAL = "Sorry, that information is not available in my travel database."

HOURS_UNAVAILABLE = "Hours information not available"

BASIC_AMENITIES = "Basic amenities available"

WELCOME_MESSAGE = (
    "🙏 Namaste! I'm your travel guide for incredible places in India. Ask me "
    "about any tourist destination, timings, amenities, or travel tips!"
)
