from importlib import import_module

from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig
from shared.clients.store.StoreClientInterface import StoreClientInterface


class StoreClientManager:
    """Builds the store client named by ``STORE_ENGINE``.

    An engine ``foo`` is served by ``StoreClientFoo`` in
    ``shared/clients/store/foo/StoreClientFoo.py``.
    """

    DEFAULT_ENGINE = "ecwid"

    def __init__(self, helper_config: HelperConfig, clock: HelperClock | None = None):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self._clock = clock
        self.client = self._create_client(self.get_engine())

    def get_engine(self) -> str:
        """Return the configured engine name in lower case."""
        return self.helper_config.get_string_val("STORE_ENGINE", default=self.DEFAULT_ENGINE).strip().lower()

    def _create_client(self, engine: str) -> StoreClientInterface:
        """
        Raises:
            ValueError: If no client class exists for ``engine``.
        """
        class_name = f"StoreClient{engine.capitalize()}"
        try:
            client_class = getattr(import_module(f"shared.clients.store.{engine}.{class_name}"), class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported store engine specified: '{engine}'. Error: {e}")

        self.logging.debug("Using %s for store engine '%s'", class_name, engine)
        return client_class(helper_config=self.helper_config, clock=self._clock)

    def get_client(self) -> StoreClientInterface:
        return self.client
