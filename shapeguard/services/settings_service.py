import logging
from typing import Any, Dict

from fastapi import HTTPException
from supabase import create_client, Client

from ..core.config import Config


logger = logging.getLogger(__name__)

APP_CONFIG_ID = 1


def get_client() -> Client:
    return create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_KEY)


def get_user_settings(user_id: str) -> Dict[str, Any]:
    """Return the stored settings row for a user, or an empty dict."""
    try:
        supabase: Client = get_client()

        result = (
            supabase
            .table(Config.SETTINGS_TABLE)
            .select('user_id, ui, config')
            .eq('user_id', user_id)
            .limit(1)
            .execute()
        )

        if not result.data:
            return {}
        return result.data[0]
    except Exception as e:
        logger.error(f"Failed to load settings for user {user_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load user settings")


def save_user_settings(user_id: str, column: str, value: Dict[str, Any]):

    try:
        supabase: Client = get_client()

        result = supabase.table(Config.SETTINGS_TABLE).upsert(
            {'user_id': user_id, column: value},
            on_conflict='user_id',
        ).execute()

        return result.data
    except Exception as e:
        logger.error(f"Failed to save {column} settings for user {user_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to save user settings")


def get_app_config() -> Dict[str, Any]:

    try:
        supabase: Client = get_client()

        result = supabase.table(Config.CONFIG_TABLE).select('id, config').eq('id', APP_CONFIG_ID).execute()
        if not result.data:
            return {}
        return result.data[0].get('config') or {}
    except Exception as e:
        logger.error(f"Failed to load app configuration: {e}")
        raise HTTPException(status_code=502, detail="Failed to load configuration")


def save_app_config(config: Dict[str, Any]):

    try:
        supabase: Client = get_client()

        result = supabase.table(Config.CONFIG_TABLE).upsert(
            {'id': APP_CONFIG_ID, 'config': config},
            on_conflict='id',
        ).execute()

        return result.data
    except Exception as e:
        logger.error(f"Failed to save app configuration: {e}")
        raise HTTPException(status_code=502, detail="Failed to save configuration")
