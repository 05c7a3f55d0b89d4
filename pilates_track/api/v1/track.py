import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pilates_track.core.config import settings
from pilates_track.core.dependencies import get_current_user, get_today, get_workout_log_repository
from pilates_track.models.user import User
from pilates_track.models.workout_log import WorkoutLog
from pilates_track.repositories.workout_log_repository import WorkoutLogRepository
from pilates_track.schemas.stats import WorkoutStatsResponse
from pilates_track.schemas.workout_log import (
    WorkoutLogCreate,
    WorkoutLogUpdate,
    WorkoutLogResponse,
    WorkoutLogListResponse,
    ShareRequest,
    ShareResponse,
    RecapResponse,
)
from pilates_track.services.calorie_estimator import CalorieEstimator
from pilates_track.services.date_utils import add_days
from pilates_track.services.recap_formatter import build_recap, default_caption
from pilates_track.services.stats_aggregator import compute_stats
from pilates_track.services.streak_calculator import compute_streaks, distinct_dates

router = APIRouter(tags=["track"])
logger = logging.getLogger(__name__)


# ==========================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# ==========================

def validate_workout_date(workout_date: date, today: date) -> None:
    """Нельзя логировать будущее; дозаписать можно не дальше BACKFILL_DAYS дней назад."""
    if workout_date > today:
        raise HTTPException(status_code=400, detail="Нельзя записать тренировку в будущем")

    if workout_date < add_days(today, -settings.BACKFILL_DAYS):
        raise HTTPException(
            status_code=400,
            detail=f"Дозаписать тренировку можно не более чем за {settings.BACKFILL_DAYS} дней",
        )


async def get_own_log(repo: WorkoutLogRepository, log_id: int, current_user: User) -> WorkoutLog:
    log = await repo.get_by_id(log_id)
    if log is None:
        raise HTTPException(status_code=404, detail="Тренировка не найдена")

    if log.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Нет доступа к этой тренировке")

    return log


async def get_current_streak(repo: WorkoutLogRepository, user_id: int, today: date) -> int:
    logs = await repo.list_for_user(user_id)
    dates = distinct_dates(log.workout_date for log in logs)
    return compute_streaks(dates, today).current_streak


def _enum_values(values) -> list:
    return [getattr(v, "value", v) for v in values or []]


# ==========================
# ENDPOINTS
# ==========================

@router.get("/stats", response_model=WorkoutStatsResponse)
async def get_stats(
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
    today: date = Depends(get_today),
):
    """Статистика тренировок: стрики, минуты за неделю/месяц, фокус-зоны, прогресс недели"""
    logs = await repo.list_for_user(current_user.id)
    stats = compute_stats(logs, today)
    return WorkoutStatsResponse(**asdict(stats))


@router.get("/logs", response_model=WorkoutLogListResponse)
async def list_logs(
    limit: int = Query(20, ge=1, le=100),
    cursor: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
):
    logs = await repo.list_page(
        current_user.id,
        limit=limit,
        cursor=cursor,
        start_date=start_date,
        end_date=end_date,
    )

    has_more = len(logs) > limit
    items = logs[:limit]
    next_cursor = items[-1].id if has_more and items else None

    return WorkoutLogListResponse(
        logs=[WorkoutLogResponse.model_validate(log) for log in items],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post("/logs", response_model=WorkoutLogResponse, status_code=status.HTTP_201_CREATED)
async def create_log(
    payload: WorkoutLogCreate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
    today: date = Depends(get_today),
):
    workout_date = payload.workout_date or today
    validate_workout_date(workout_date, today)

    calories = payload.calorie_estimate or CalorieEstimator.estimate(
        payload.duration_minutes,
        payload.workout_type.value,
        payload.rpe,
        current_user.weight_kg,
    )

    log = WorkoutLog(
        user_id=current_user.id,
        workout_date=workout_date,
        duration_minutes=payload.duration_minutes,
        workout_type=payload.workout_type,
        rpe=payload.rpe,
        focus_areas=_enum_values(payload.focus_areas),
        calorie_estimate=calories,
        notes=payload.notes or None,
        studio_id=payload.studio_id or None,
        custom_studio_name=payload.custom_studio_name or None,
        session_id=payload.session_id or None,
        image_url=payload.image_url or None,
        is_shared=False,
    )
    log = await repo.create(log)

    logger.info("Пользователь %s записал тренировку %s за %s", current_user.id, log.id, workout_date)
    return WorkoutLogResponse.model_validate(log)


@router.get("/logs/{log_id}", response_model=WorkoutLogResponse)
async def get_log(
    log_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
):
    log = await get_own_log(repo, log_id, current_user)
    return WorkoutLogResponse.model_validate(log)


@router.patch("/logs/{log_id}", response_model=WorkoutLogResponse)
async def update_log(
    log_id: int,
    payload: WorkoutLogUpdate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
    today: date = Depends(get_today),
):
    log = await get_own_log(repo, log_id, current_user)
    data = payload.model_dump(exclude_unset=True)

    if data.get("workout_date") is not None:
        validate_workout_date(data["workout_date"], today)
        log.workout_date = data["workout_date"]

    for field in ("duration_minutes", "workout_type", "rpe"):
        if data.get(field) is not None:
            setattr(log, field, data[field])

    if "focus_areas" in data:
        log.focus_areas = _enum_values(data["focus_areas"])

    if "notes" in data:
        log.notes = data["notes"] or None

    if "image_url" in data:
        log.image_url = data["image_url"] or None

    # Студия из каталога и своё название взаимоисключают друг друга
    if "studio_id" in data:
        log.studio_id = data["studio_id"] or None
        if log.studio_id:
            log.custom_studio_name = None

    if "custom_studio_name" in data:
        log.custom_studio_name = data["custom_studio_name"] or None
        if log.custom_studio_name:
            log.studio_id = None

    # Пересчитываем калории, если изменились длительность, тип или RPE
    if any(data.get(field) is not None for field in ("duration_minutes", "workout_type", "rpe")):
        workout_type = getattr(log.workout_type, "value", log.workout_type)
        log.calorie_estimate = data.get("calorie_estimate") or CalorieEstimator.estimate(
            log.duration_minutes, workout_type, log.rpe, current_user.weight_kg
        )
    elif "calorie_estimate" in data:
        log.calorie_estimate = data["calorie_estimate"]

    log = await repo.save(log)
    logger.info("Пользователь %s обновил тренировку %s", current_user.id, log.id)
    return WorkoutLogResponse.model_validate(log)


@router.delete("/logs/{log_id}")
async def delete_log(
    log_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
):
    log = await get_own_log(repo, log_id, current_user)
    await repo.delete(log)

    logger.info("Пользователь %s удалил тренировку %s", current_user.id, log_id)
    return {"success": True, "message": "Тренировка удалена"}


@router.get("/logs/{log_id}/recap", response_model=RecapResponse)
async def get_recap(
    log_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
    today: date = Depends(get_today),
):
    log = await get_own_log(repo, log_id, current_user)
    current_streak = await get_current_streak(repo, current_user.id, today)
    return RecapResponse(**build_recap(log, current_streak))


@router.post("/logs/{log_id}/share", response_model=ShareResponse)
async def share_log(
    log_id: int,
    request: Optional[ShareRequest] = None,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
    today: date = Depends(get_today),
):
    log = await get_own_log(repo, log_id, current_user)
    if log.is_shared:
        raise HTTPException(status_code=400, detail="Эта тренировка уже опубликована")

    current_streak = await get_current_streak(repo, current_user.id, today)
    caption = (request.caption if request else None) or default_caption(log, current_streak)

    log.is_shared = True
    log = await repo.save(log)

    logger.info("Пользователь %s поделился тренировкой %s", current_user.id, log.id)
    return ShareResponse(
        log=WorkoutLogResponse.model_validate(log),
        recap=RecapResponse(**build_recap(log, current_streak)),
        caption=caption,
        message="Тренировка опубликована",
    )


@router.delete("/logs/{log_id}/share", response_model=WorkoutLogResponse)
async def unshare_log(
    log_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutLogRepository = Depends(get_workout_log_repository),
):
    log = await get_own_log(repo, log_id, current_user)
    if not log.is_shared:
        raise HTTPException(status_code=400, detail="Эта тренировка не была опубликована")

    log.is_shared = False
    log = await repo.save(log)
    return WorkoutLogResponse.model_validate(log)
