"""
笔记路由（全部需要登录）
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from pydantic import ValidationError
from starlette.datastructures import FormData, UploadFile as StarletteUploadFile

from notes_api.config import Settings
from notes_api.dependencies import get_current_user, get_note_service, get_settings
from notes_api.errors import BadRequest, bad_request_from
from notes_api.models.note import Note
from notes_api.schemas.note import NoteCreate, NoteOut, NoteUpdate
from notes_api.services.notes import NoteService
from notes_api.utils.auth import CurrentUser
from notes_api.utils.storage import get_file_url, remove_file_quietly, save_upload

router = APIRouter(dependencies=[Depends(get_current_user)])

FORM_FIELDS = ("title", "description")
FILE_FIELD = "file"


def note_to_out(note: Note) -> NoteOut:
    return NoteOut(
        id=note.id,
        title=note.title,
        description=note.description,
        file_url=note.file_url,
        uploaded_by=note.owner_id,
        created_at=note.created_at,
    )


def _has_file(file: Optional[UploadFile]) -> bool:
    # 浏览器提交空的 file 字段时 filename 为空
    return file is not None and bool(file.filename)


def _check_file_parts(form: FormData):
    """只允许一个文件，且只能放在 file 字段"""
    for key, value in form.multi_items():
        if isinstance(value, StarletteUploadFile) and key != FILE_FIELD:
            raise BadRequest(f"Unexpected file field: {key}")
    if len(form.getlist(FILE_FIELD)) > 1:
        raise BadRequest("Only one file allowed")


async def _parse_form(request: Request, model):
    """
    校验表单中的 title / description

    直接读原始表单：FastAPI 的 Form() 会把空字符串当作未提交，
    而 description="" 在更新时表示清空。
    """
    form = await request.form()
    _check_file_parts(form)
    fields = {k: form[k] for k in FORM_FIELDS if k in form}
    try:
        return model(**fields)
    except ValidationError as e:
        raise bad_request_from(e)


@router.get("", response_model=List[NoteOut])
async def list_notes(
    user: CurrentUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
):
    """当前用户的笔记列表（最新在前）"""
    return [note_to_out(n) for n in await notes.list(user.id)]


@router.get("/{note_id}", response_model=NoteOut)
async def get_note(
    note_id: str,
    user: CurrentUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
):
    """获取单条笔记"""
    return note_to_out(await notes.get(note_id, user.id))


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: Request,
    file: Optional[UploadFile] = File(None),
    user: CurrentUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    settings: Settings = Depends(get_settings),
):
    """创建笔记（可选附带一个文件）"""
    req = await _parse_form(request, NoteCreate)

    filepath = None
    try:
        if _has_file(file):
            filepath = await save_upload(file, settings.upload_dir, settings.max_upload_bytes)
        note = await notes.create(
            user.id,
            req.title,
            req.description,
            get_file_url(filepath) if filepath else None,
        )
    except BaseException:
        # 已落盘的新文件随请求失败一起清理
        remove_file_quietly(filepath)
        raise

    return note_to_out(note)


@router.put("/{note_id}", response_model=NoteOut)
async def update_note(
    note_id: str,
    request: Request,
    file: Optional[UploadFile] = File(None),
    user: CurrentUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    settings: Settings = Depends(get_settings),
):
    """更新笔记；上传新文件会替换旧文件"""
    req = await _parse_form(request, NoteUpdate)
    changes = {field: getattr(req, field) for field in req.model_fields_set}

    filepath = None
    try:
        if _has_file(file):
            filepath = await save_upload(file, settings.upload_dir, settings.max_upload_bytes)
            changes["file_url"] = get_file_url(filepath)
        note = await notes.update(note_id, user.id, changes)
    except BaseException:
        remove_file_quietly(filepath)
        raise

    return note_to_out(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    user: CurrentUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
):
    """删除笔记及其文件"""
    await notes.delete(note_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
