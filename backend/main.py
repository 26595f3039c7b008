"""
Main entry point for the learnkit API
Re-export the FastAPI app for Docker/uvicorn to find
"""
import sys
import os

# Add this directory to path so learnkit is importable without installation
sys.path.insert(0, os.path.dirname(__file__))

from learnkit.main import app

__all__ = ["app"]
