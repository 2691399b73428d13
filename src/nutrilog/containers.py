"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from nutrilog.adapters.fcm_push_client import HttpxFcmPushClient, LoggingPushClient
from nutrilog.adapters.openai_vision_client import OpenAIVisionClient
from nutrilog.adapters.supabase_auth_client import SupabaseAuthClient
from nutrilog.adapters.supabase_daily_summary_repository import (
    SupabaseDailySummaryRepository,
)
from nutrilog.adapters.supabase_image_storage import SupabaseImageStorage
from nutrilog.adapters.supabase_meal_repository import SupabaseMealRepository
from nutrilog.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from nutrilog.adapters.supabase_user_repository import SupabaseUserRepository
from nutrilog.clock import Clock, SystemClock
from nutrilog.config import Settings, parse_api_keys
from nutrilog.scheduler import ReminderScheduler
from nutrilog.services.analytics import AnalyticsService
from nutrilog.services.images import ImageStorage
from nutrilog.services.meals import MealService
from nutrilog.services.notifications import NotificationService
from nutrilog.services.reminders import ReminderService
from nutrilog.services.summaries import DailySummaryService
from nutrilog.services.users import UserService
from nutrilog.services.vision import FoodAnalysisService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    user_service: UserService
    notification_service: NotificationService
    summary_service: DailySummaryService
    meal_service: MealService
    analytics_service: AnalyticsService
    food_analysis_service: FoodAnalysisService
    reminder_service: ReminderService
    image_storage: ImageStorage
    reminder_scheduler: ReminderScheduler | None
    close_resources: Callable[[], Awaitable[None]]


def _supabase_client(settings: Settings) -> Client:
    return create_client(
        settings.supabase_url,
        settings.supabase_service_key,
        options=ClientOptions(
            postgrest_client_timeout=settings.supabase_timeout_seconds,
            storage_client_timeout=int(settings.supabase_timeout_seconds),
        ),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = resolved_settings.default_timezone
    clock = SystemClock()
    supabase_client = _supabase_client(resolved_settings)
    # Auth keeps its own session state, so it gets a separate client.
    auth_client = SupabaseAuthClient(_supabase_client(resolved_settings))

    user_repository = SupabaseUserRepository(supabase_client)
    summary_repository = SupabaseDailySummaryRepository(
        supabase_client, timeout_ms=resolved_settings.meal_transaction_timeout_ms
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    notification_repository = SupabaseNotificationRepository(supabase_client)
    image_storage = SupabaseImageStorage(
        supabase_client, bucket=resolved_settings.meal_images_bucket
    )

    if resolved_settings.push_configured:
        push_client = HttpxFcmPushClient.create(
            project_id=resolved_settings.fcm_project_id,
            access_token=resolved_settings.fcm_access_token,
        )
    else:
        push_client = LoggingPushClient()
    notification_service = NotificationService(notification_repository, push_client)
    user_service = UserService(
        repository=user_repository,
        auth_client=auth_client,
        notification_service=notification_service,
        clock=clock,
        default_timezone=timezone,
    )
    summary_service = DailySummaryService(
        summary_repository, user_repository, default_timezone=timezone
    )
    meal_service = MealService(
        repository=meal_repository,
        summary_service=summary_service,
        notification_service=notification_service,
        image_storage=image_storage,
        user_repository=user_repository,
        clock=clock,
        transaction_timeout_ms=resolved_settings.meal_transaction_timeout_ms,
        default_timezone=timezone,
    )
    analytics_service = AnalyticsService(
        summary_repository, user_repository, clock, default_timezone=timezone
    )
    openai_client = OpenAIVisionClient.create(
        parse_api_keys(resolved_settings.openai_api_keys)
    )
    food_analysis_service = FoodAnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    reminder_service = ReminderService(
        user_repository=user_repository,
        summary_repository=summary_repository,
        notification_service=notification_service,
        clock=clock,
        default_timezone=timezone,
    )
    reminder_scheduler = (
        ReminderScheduler(reminder_service, timezone=timezone)
        if resolved_settings.reminders_enabled
        else None
    )

    async def close_resources() -> None:
        await push_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        user_service=user_service,
        notification_service=notification_service,
        summary_service=summary_service,
        meal_service=meal_service,
        analytics_service=analytics_service,
        food_analysis_service=food_analysis_service,
        reminder_service=reminder_service,
        image_storage=image_storage,
        reminder_scheduler=reminder_scheduler,
        close_resources=close_resources,
    )
