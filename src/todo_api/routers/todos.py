from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..errors import TodoStoreError, ValidationError
from ..logger import get_logger
from ..repositories import Repository, get_repository
from ..schemas import ErrorOut, TodoCreate, TodoOut, TodoUpdate

logger = get_logger(__name__)

TODO_NOT_FOUND = "Todo not found"

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """Per-request repository; tests swap it out via `get_repository` overrides."""
    return repo


def _store_failure(message: str) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TODO_NOT_FOUND)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo in insertion order.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"model": ErrorOut, "description": "Todos could not be read"},
    },
)
@router.get("/", response_model=List[TodoOut], include_in_schema=False)
def list_todos(repo: Repository = Depends(_get_repo)) -> List[TodoOut]:
    """
    List all todos.
    """
    try:
        todos = repo.find_all()
    except TodoStoreError:
        raise _store_failure("Failed to fetch todos")
    return [TodoOut(**t) for t in todos]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"model": ErrorOut, "description": "Todo not found"},
        500: {"model": ErrorOut, "description": "Todos could not be read"},
    },
)
def get_todo(todo_id: str, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    try:
        item = repo.find_by_id(todo_id)
    except TodoStoreError:
        raise _store_failure("Failed to fetch todo")
    if item is None:
        raise _not_found()
    return TodoOut(**item)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Validation error"},
        500: {"model": ErrorOut, "description": "Todo could not be saved"},
    },
)
@router.post("/", response_model=TodoOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_todo(payload: TodoCreate, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Create a new Todo.
    """
    try:
        created = repo.create(payload.text)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TodoStoreError:
        raise _store_failure("Failed to create todo")
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Update the text and/or completion status of a Todo item. Omitted fields are left unchanged.",
    responses={
        200: {"description": "Todo updated"},
        400: {"model": ErrorOut, "description": "Validation error"},
        404: {"model": ErrorOut, "description": "Todo not found"},
        500: {"model": ErrorOut, "description": "Todo could not be saved"},
    },
)
def update_todo(todo_id: str, payload: TodoUpdate, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Partial update of a Todo item.
    """
    try:
        updated = repo.update(todo_id, payload.changes())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TodoStoreError:
        raise _store_failure("Failed to update todo")
    if updated is None:
        raise _not_found()
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"model": ErrorOut, "description": "Todo not found"},
        500: {"model": ErrorOut, "description": "Todo could not be deleted"},
    },
)
def delete_todo(todo_id: str, repo: Repository = Depends(_get_repo)) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    try:
        ok = repo.delete(todo_id)
    except TodoStoreError:
        raise _store_failure("Failed to delete todo")
    if not ok:
        raise _not_found()
    return None
