"""API routes — thin controllers that delegate to the GitService port."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from scm_driver.domain.entities import PageOptions
from scm_driver.domain.ports.git_service import GitService
from scm_driver.domain.value_objects import RepoName
from scm_driver.interface.dependencies import get_git_service
from scm_driver.interface.schemas import CommitResponse, ReferenceResponse, TreeResponse

router = APIRouter(prefix="/repos/{owner}/{name}")

_ERRORS = {
    401: {"description": "Backend rejected the configured credential"},
    422: {"description": "Invalid repository identifier"},
    429: {"description": "Backend rate limit exceeded"},
    502: {"description": "Backend unreachable or returned a malformed payload"},
}


def _page_options(
    page: int | None = Query(default=None, ge=1),
    size: int | None = Query(default=None, ge=1),
    cursor: str | None = None,
) -> PageOptions:
    return PageOptions(page=page, size=size, cursor=cursor)


@router.get("/branches", response_model=list[ReferenceResponse], responses=_ERRORS)
async def list_branches(
    owner: str,
    name: str,
    opts: PageOptions = Depends(_page_options),
    service: GitService = Depends(get_git_service),
) -> list[ReferenceResponse]:
    """List the repository's branches."""
    refs = await service.list_branches(RepoName.parse(f"{owner}/{name}"), opts)
    return [ReferenceResponse.model_validate(ref) for ref in refs]


@router.get("/tags", response_model=list[ReferenceResponse], responses=_ERRORS)
async def list_tags(
    owner: str,
    name: str,
    opts: PageOptions = Depends(_page_options),
    service: GitService = Depends(get_git_service),
) -> list[ReferenceResponse]:
    """List the repository's tags."""
    refs = await service.list_tags(RepoName.parse(f"{owner}/{name}"), opts)
    return [ReferenceResponse.model_validate(ref) for ref in refs]


@router.get(
    "/commits/{ref:path}",
    response_model=CommitResponse,
    responses={404: {"description": "No such commit"}, **_ERRORS},
)
async def find_commit(
    owner: str,
    name: str,
    ref: str,
    service: GitService = Depends(get_git_service),
) -> CommitResponse:
    """Resolve a branch, tag or sha to a commit."""
    commit = await service.find_commit(RepoName.parse(f"{owner}/{name}"), ref)
    if commit is None:
        raise HTTPException(status_code=404, detail=f"Commit '{ref}' not found.")
    return CommitResponse.model_validate(commit)


@router.get(
    "/trees/{sha:path}",
    response_model=TreeResponse,
    responses={404: {"description": "No such tree"}, **_ERRORS},
)
async def get_tree(
    owner: str,
    name: str,
    sha: str,
    recursive: bool | None = None,
    service: GitService = Depends(get_git_service),
) -> TreeResponse:
    """Return the tree for a sha or ref name."""
    tree = await service.get_tree(RepoName.parse(f"{owner}/{name}"), sha, recursive)
    if tree is None:
        raise HTTPException(status_code=404, detail=f"Tree '{sha}' not found.")
    return TreeResponse.model_validate(tree)
