"""
Admin HTTP routes - /api/*
"""
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from msg_guard.admin.service import AdminService
from msg_guard.moderation.store import Mode

router = APIRouter(prefix="/api")


class TextRequest(BaseModel):
    text: str


class WordRequest(BaseModel):
    word: str = Field(min_length=1)


class KeywordsRequest(BaseModel):
    keywords: List[str]


class PatternRequest(BaseModel):
    pattern: str = Field(min_length=1)


class WhitelistRequest(BaseModel):
    whitelist: List[str]


class EnabledRequest(BaseModel):
    enabled: bool


class ModeRequest(BaseModel):
    mode: Mode


def get_admin(request: Request) -> AdminService:
    return request.app.state.admin


def _failed(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


@router.get("/data")
def get_data(admin: AdminService = Depends(get_admin)):
    """Snapshot for the admin page"""
    return admin.get_snapshot()


@router.post("/test")
def test_text(body: TextRequest, admin: AdminService = Depends(get_admin)):
    """Dry run, no stats"""
    return admin.test_text(body.text)


# ---- keywords ----

@router.get("/keywords")
def list_keywords(admin: AdminService = Depends(get_admin)):
    return {"keywords": admin.get_keywords()}


@router.post("/keywords")
def add_keyword(body: WordRequest, admin: AdminService = Depends(get_admin)):
    if not admin.add_keyword(body.word):
        return _failed("Failed to add keyword")
    return {"success": True, "keywords": admin.get_keywords()}


@router.delete("/keywords")
def remove_keyword(body: WordRequest, admin: AdminService = Depends(get_admin)):
    if not admin.remove_keyword(body.word):
        return _failed("Failed to remove keyword")
    return {"success": True, "keywords": admin.get_keywords()}


@router.put("/keywords")
def replace_keywords(body: KeywordsRequest, admin: AdminService = Depends(get_admin)):
    if not admin.replace_keywords(body.keywords):
        return _failed("Failed to update keywords")
    return {"success": True, "keywords": admin.get_keywords()}


# ---- whitelist ----

@router.get("/whitelist")
def list_whitelist(admin: AdminService = Depends(get_admin)):
    return {"whitelist": admin.get_whitelist()}


@router.post("/whitelist")
def add_whitelist(body: PatternRequest, admin: AdminService = Depends(get_admin)):
    if not admin.add_whitelist(body.pattern):
        return _failed("Failed to add whitelist pattern")
    return {"success": True, "whitelist": admin.get_whitelist()}


@router.delete("/whitelist")
def remove_whitelist(body: PatternRequest, admin: AdminService = Depends(get_admin)):
    if not admin.remove_whitelist(body.pattern):
        return _failed("Failed to remove whitelist pattern")
    return {"success": True, "whitelist": admin.get_whitelist()}


@router.put("/whitelist")
def replace_whitelist(body: WhitelistRequest, admin: AdminService = Depends(get_admin)):
    if not admin.replace_whitelist(body.whitelist):
        return _failed("Failed to update whitelist")
    return {"success": True, "whitelist": admin.get_whitelist()}


# ---- switches ----

@router.put("/enabled")
def set_enabled(body: EnabledRequest, admin: AdminService = Depends(get_admin)):
    if not admin.set_enabled(body.enabled):
        return _failed("Failed to update enabled state")
    return {"success": True, "enabled": body.enabled}


@router.put("/mode")
def set_mode(body: ModeRequest, admin: AdminService = Depends(get_admin)):
    if not admin.set_mode(body.mode):
        return _failed("Failed to update mode")
    return {"success": True, "mode": body.mode.value}


@router.api_route("/{rest:path}", methods=["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"])
def not_found(rest: str):
    return JSONResponse(status_code=404, content={"error": "Not Found"})
