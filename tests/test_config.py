from product_import.core.config import Settings, get_settings


def test_database_url_from_mysql_settings():
    settings = Settings(_env_file=None, MYSQL_USER="importer", MYSQL_PASSWORD="secret",
                        MYSQL_HOST="db", MYSQL_PORT=3307, MYSQL_DATABASE="shop")

    assert settings.database_url == "mysql+pymysql://importer:secret@db:3307/shop?charset=utf8mb4"


def test_database_url_override():
    settings = Settings(_env_file=None, DATABASE_URL="sqlite:///catalog.db")

    assert settings.database_url == "sqlite:///catalog.db"


def test_category_defaults():
    settings = Settings(_env_file=None)

    assert settings.TABLE_PREFIX == ""
    assert settings.CATEGORY_URL_SUFFIX == ".html"
    assert settings.CATEGORY_NAME_PATH_SEPARATOR == "/"
    assert settings.AUTO_CREATE_CATEGORIES is True


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TABLE_PREFIX", "mg_")
    monkeypatch.setenv("AUTO_CREATE_CATEGORIES", "false")
    monkeypatch.setenv("CATEGORY_NAME_PATH_SEPARATOR", ">")

    settings = Settings(_env_file=None)

    assert settings.TABLE_PREFIX == "mg_"
    assert settings.AUTO_CREATE_CATEGORIES is False
    assert settings.CATEGORY_NAME_PATH_SEPARATOR == ">"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
