"""Weather-aware conversational front-end for a hosted dialogue service."""
