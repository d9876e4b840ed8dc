import os
import logging
from pathlib import Path

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	value = raw.strip().lower()
	if value in ("1", "true", "yes", "on"):
		return True
	if value in ("0", "false", "no", "off"):
		return False
	logging.warning("Invalid %s: %r", name, raw)
	return default


TARGET_SITE_URL = get_str_env("TARGET_SITE_URL", "https://example.com")
USER_AGENT = get_str_env("USER_AGENT", "SiteCrawl/0.1")
FETCH_MODE = get_str_env("FETCH_MODE", "headless_chromium")


def page_cache_dir() -> str:
	return get_str_env("PAGE_CACHE_DIR", os.path.join(os.getcwd(), "page-cache"))


def page_cache_max_age_minutes() -> int:
	return get_int_env("PAGE_CACHE_MAX_AGE_MINUTES", 60)


def log_level() -> str:
	return (get_str_env("LOG_LEVEL", "INFO") or "INFO").strip().upper()
