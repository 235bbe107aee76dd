import pytest

from jsx_i18n.catalog import TranslationCatalog
from jsx_i18n.config import ExtractConfig
from jsx_i18n.transform import TransformContext, transform_source


@pytest.fixture
def catalog_path(tmp_path):
    return tmp_path / "locales" / "en.json"


@pytest.fixture
def config(catalog_path):
    return ExtractConfig(
        translation_file=str(catalog_path),
        import_name="react-i18next",
    )


@pytest.fixture
def context(config):
    catalog = TranslationCatalog(config.translation_file, config.translation_root)
    catalog.load()
    return TransformContext(config, catalog, file_path="Component.tsx")


@pytest.fixture
def run(context):
    """Преобразует исходник в общем контексте; каталог копится между вызовами."""
    def _run(source):
        return transform_source(source, context)
    return _run
