"""
Whisper Relay API - FastAPI surface over the contract facade.
"""
