"""Pydantic schemas for script (paste) endpoints."""

from typing import List

from pydantic import BaseModel


class ScriptResponse(BaseModel):
    """Response model for a script."""
    name: str
    content: str


class ListScriptsResponse(BaseModel):
    """Response model for script listing."""
    scripts: List[str]


class SaveScriptRequest(BaseModel):
    """Request model for saving a script."""
    content: str


class SaveScriptResponse(BaseModel):
    """Response model for a saved script."""
    name: str
    size: int
    chunks: int
