"""
HTTP routes for the board API.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.context import BoardContext
from backend.dependencies import get_board_context
from backend.schemas import (
    ContactPayload,
    ContactResponse,
    ContactUpdatePayload,
    DemoDataStatusResponse,
    GroupedContactsResponse,
    HealthResponse,
    LoginPayload,
    MessageResponse,
    RegisterPayload,
    SeedResponse,
    SessionResponse,
    TaskCreatePayload,
    TaskResponse,
    TaskStatisticsResponse,
    TaskUpdatePayload,
    UserResponse,
)
from backend.seed import SeedResult
from backend.services import (
    DUPLICATE_EMAIL,
    INVALID_CREDENTIALS,
    NOT_FOUND,
    ServiceResult,
)
from shared.types import TaskStatus

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_STATUS = {
    DUPLICATE_EMAIL: 409,
    INVALID_CREDENTIALS: 401,
    NOT_FOUND: 404,
}


def _unwrap(result: ServiceResult):
    if not result.success:
        raise HTTPException(
            status_code=_ERROR_STATUS.get(result.error, 400), detail=result.message
        )
    return result.data


def _seed_response(result: SeedResult) -> SeedResponse:
    if not result.success:
        logger.error("Demo data operation failed: %s", result.error)
        raise HTTPException(status_code=502, detail=result.error or "Remote write failed")
    return SeedResponse.model_validate(result)


@router.get("/health", response_model=HealthResponse)
async def health(ctx: BoardContext = Depends(get_board_context)):
    return HealthResponse(status="ok", connected=await ctx.sync.is_connected())


# Contacts


@router.get("/contacts", response_model=List[ContactResponse])
async def list_contacts(ctx: BoardContext = Depends(get_board_context)):
    return await ctx.contacts.list_all()


@router.get("/contacts/grouped", response_model=GroupedContactsResponse)
async def grouped_contacts(ctx: BoardContext = Depends(get_board_context)):
    grouped = await ctx.contacts.grouped()
    return GroupedContactsResponse(
        groups={
            letter: [asdict(contact) for contact in contacts]
            for letter, contacts in grouped.items()
        }
    )


@router.post("/contacts", response_model=ContactResponse, status_code=201)
async def create_contact(
    payload: ContactPayload, ctx: BoardContext = Depends(get_board_context)
):
    return _unwrap(
        await ctx.contact_service.add_contact(payload.name, payload.email, payload.phone)
    )


@router.get("/contacts/{contact_id}", response_model=ContactResponse)
async def get_contact(contact_id: str, ctx: BoardContext = Depends(get_board_context)):
    contact = await ctx.contacts.find_by_id(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.patch("/contacts/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: str,
    payload: ContactUpdatePayload,
    ctx: BoardContext = Depends(get_board_context),
):
    return _unwrap(
        await ctx.contact_service.edit_contact(
            contact_id, payload.name, payload.email, payload.phone
        )
    )


@router.delete("/contacts/{contact_id}", response_model=MessageResponse)
async def delete_contact(contact_id: str, ctx: BoardContext = Depends(get_board_context)):
    result = await ctx.contact_service.delete_contact(contact_id)
    _unwrap(result)
    return MessageResponse(success=True, message=result.message)


# Tasks


@router.get("/tasks", response_model=List[TaskResponse])
async def list_tasks(
    status: Optional[TaskStatus] = Query(None, description="Board column"),
    q: Optional[str] = Query(None, description="Title/description search term"),
    ctx: BoardContext = Depends(get_board_context),
):
    if not q:
        if status is None:
            return await ctx.tasks.list_all()
        return await ctx.tasks.list_by_status(status)
    tasks = await ctx.tasks.search(q)
    if status is not None:
        tasks = [task for task in tasks if task.status == status]
    return tasks


@router.get("/tasks/stats", response_model=TaskStatisticsResponse)
async def task_statistics(ctx: BoardContext = Depends(get_board_context)):
    return await ctx.tasks.statistics()


@router.post("/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    payload: TaskCreatePayload, ctx: BoardContext = Depends(get_board_context)
):
    return _unwrap(
        await ctx.task_service.add_task(
            payload.title,
            payload.due_date,
            payload.category,
            description=payload.description,
            priority=payload.priority,
            status=payload.status,
            assigned_to=payload.assigned_to,
            subtasks=[subtask.model_dump() for subtask in payload.subtasks],
        )
    )


@router.get("/tasks/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, ctx: BoardContext = Depends(get_board_context)):
    task = await ctx.tasks.find_by_id(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    payload: TaskUpdatePayload,
    ctx: BoardContext = Depends(get_board_context),
):
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    task = await ctx.tasks.update(task_id, updates)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: str, ctx: BoardContext = Depends(get_board_context)):
    if not await ctx.tasks.delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return MessageResponse(success=True, message="Task deleted successfully")


@router.post("/tasks/{task_id}/subtasks/{subtask_id}/toggle", response_model=TaskResponse)
async def toggle_subtask(
    task_id: str, subtask_id: str, ctx: BoardContext = Depends(get_board_context)
):
    task = await ctx.tasks.toggle_subtask(task_id, subtask_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Subtask not found")
    return task


# Auth


@router.post("/auth/register", response_model=UserResponse, status_code=201)
async def register(payload: RegisterPayload, ctx: BoardContext = Depends(get_board_context)):
    return _unwrap(
        await ctx.auth.register(
            payload.name,
            payload.email,
            payload.password,
            payload.confirm_password,
            payload.privacy_accepted,
        )
    )


@router.post("/auth/login", response_model=UserResponse)
async def login(payload: LoginPayload, ctx: BoardContext = Depends(get_board_context)):
    return _unwrap(await ctx.auth.login(payload.email, payload.password))


@router.post("/auth/guest", response_model=UserResponse)
def guest_login(ctx: BoardContext = Depends(get_board_context)):
    return _unwrap(ctx.auth.guest_login())


@router.get("/auth/session", response_model=SessionResponse)
def session(ctx: BoardContext = Depends(get_board_context)):
    user = ctx.auth.current_user()
    if user is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user=asdict(user))


@router.post("/auth/logout", response_model=MessageResponse)
def logout(ctx: BoardContext = Depends(get_board_context)):
    ctx.auth.logout()
    return MessageResponse(success=True, message="Logged out")


# Demo data


@router.get("/demo-data", response_model=DemoDataStatusResponse)
async def demo_data_status(ctx: BoardContext = Depends(get_board_context)):
    status = await ctx.seeder.check()
    return DemoDataStatusResponse(**asdict(status), all_exist=status.all_exist)


@router.post("/demo-data/upload", response_model=SeedResponse)
async def upload_demo_data(
    force: bool = Query(False, description="Overwrite existing contacts and tasks"),
    ctx: BoardContext = Depends(get_board_context),
):
    return _seed_response(await ctx.seeder.upload(force=force))


@router.post("/demo-data/reset", response_model=SeedResponse)
async def reset_demo_data(ctx: BoardContext = Depends(get_board_context)):
    return _seed_response(await ctx.seeder.reset())


@router.post("/demo-data/initialize", response_model=SeedResponse)
async def initialize_demo_data(ctx: BoardContext = Depends(get_board_context)):
    return _seed_response(await ctx.seeder.initialize())
