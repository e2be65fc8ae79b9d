from docingest.config.settings import Settings
from docingest.indexing.local_publisher import LocalIndexPublisher
from docingest.indexing.publisher_base import BaseIndexPublisher
from docingest.indexing.record_builder import IndexRecordBuilder
from docingest.indexing.search_publisher import SearchIndexPublisher
from docingest.storage.base import BaseBlobStore


class IndexPublisherFactory:
    """Creates the configured index publisher adapter."""

    PROVIDERS = ("azure_search", "local")

    @classmethod
    def create(cls, settings: Settings, blob_store: BaseBlobStore) -> BaseIndexPublisher:
        provider = settings.search_provider.lower()
        if provider == "local":
            return LocalIndexPublisher(blob_store, container=settings.index_container)
        if provider == "azure_search":
            endpoint = settings.search_endpoint.strip()
            index_name = settings.search_index_name.strip()
            if not endpoint or not index_name:
                raise ValueError(
                    "search_endpoint and search_index_name are required for "
                    "search_provider=azure_search"
                )
            return SearchIndexPublisher(
                endpoint=endpoint,
                index_name=index_name,
                api_key=settings.search_admin_key,
                api_version=settings.search_api_version,
            )
        raise ValueError(
            f"Unknown search provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )


def build_record_builder(settings: Settings) -> IndexRecordBuilder:
    return IndexRecordBuilder(id_strategy=settings.index_id_strategy)
