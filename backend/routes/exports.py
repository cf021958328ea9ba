"""NFS export API routes."""

from fastapi import APIRouter, Depends

from middleware.auth import require_csrf_header
from models import ExportCreateRequest, ExportRemoveRequest, ExportResponse
from services import nfs_options
from services.nfs_exports import NFSManager

router = APIRouter()


def get_manager() -> NFSManager:
    """Dependency: the manager used by the routes. Overridden in tests."""
    return NFSManager()


@router.get("/options")
def list_options():
    """List the zero-argument option keywords accepted in ``flags``."""
    return {"flags": sorted(nfs_options.FLAGS)}


@router.post("", response_model=ExportResponse, dependencies=[Depends(require_csrf_header)])
def create_export(body: ExportCreateRequest, manager: NFSManager = Depends(get_manager)):
    """Export a path to a host."""
    options = body.to_options()
    manager.export(body.path, body.host, *options)
    return {
        "message": f"Exported {body.path} to {body.host}",
        "command": nfs_options.exportfs_command_line(body.path, body.host, options),
    }


@router.delete("", response_model=ExportResponse, dependencies=[Depends(require_csrf_header)])
def remove_export(body: ExportRemoveRequest, manager: NFSManager = Depends(get_manager)):
    """Unexport a path from a host."""
    manager.unexport(body.path, body.host)
    return {
        "message": f"Unexported {body.path} from {body.host}",
        "command": nfs_options.unexportfs_command_line(body.path, body.host),
    }
