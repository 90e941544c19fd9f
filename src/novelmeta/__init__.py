from .version import __version__ as __version__

__title__ = "NovelMeta"
__description__ = "Bibliographic metadata extraction for web novel catalogues."
__license__ = "Apache-2.0"
