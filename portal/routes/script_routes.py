"""Public script (paste) routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from portal.deps import get_script_service
from portal.schemas.scripts import ListScriptsResponse, ScriptResponse
from portal.services.script_service import ScriptService

router = APIRouter(prefix="/scripts", tags=["Scripts"])


@router.get("", response_model=ListScriptsResponse)
async def list_scripts(script_service: ScriptService = Depends(get_script_service)):
    """
    List the names of all stored scripts.
    """
    return ListScriptsResponse(scripts=await script_service.list_scripts())


@router.get("/{name}", response_model=ScriptResponse)
async def get_script(name: str, script_service: ScriptService = Depends(get_script_service)):
    """
    Load a script.

    Raises:
        - 400: Invalid script name
        - 404: Script not found
    """
    document = await script_service.load(name)
    return ScriptResponse(name=document.name, content=document.content)


@router.get("/{name}/raw", response_class=PlainTextResponse)
async def get_script_raw(name: str, script_service: ScriptService = Depends(get_script_service)):
    """
    Serve a script's content as text/plain.
    """
    document = await script_service.load(name)
    return PlainTextResponse(document.content, media_type="text/plain; charset=utf-8")
