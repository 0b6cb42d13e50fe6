"""
Centralized constants for the chat session and admin views.

Change delays, intervals or canned replies here instead of scattering literals across routes and client.
"""

# Session controller: delay between the greeting and the favorite-food question (not cancellable)
FOLLOW_UP_DELAY_SECONDS = 2.0
FOOD_QUESTION = "By the way, what's your favorite food? I'm curious about local tastes!"

# Canned replies shown instead of upstream detail
CHAT_APOLOGY = "I apologize, but I cannot process your request at the moment. Please try again."
CLIENT_REPLY_FAILED = "Sorry, I'm having trouble responding right now. Please try again."
CLIENT_CONNECT_FAILED = "Sorry, I'm having trouble connecting. Please try again."
GREETING_FALLBACK = "Welcome!"

# Admin page auto-refresh
ADMIN_REFRESH_INTERVAL_SECONDS = 30.0

# Completion limits
GREETING_MAX_TOKENS = 60
CHAT_MAX_TOKENS = 300
CHAT_TEMPERATURE = 0.7

UNKNOWN_LOCATION = "Unknown"
