from shared.clients.store.StoreClientInterface import StoreClientInterface, StoreRequestError
from shared.clients.store.models.Batch import BatchResult, BatchTicket, PageDescriptor
from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

AUTH_MODES = ("query", "header")


class StoreClientEcwid(StoreClientInterface):
    def __init__(self, helper_config: HelperConfig, clock: HelperClock | None = None):
        super().__init__(helper_config=helper_config, clock=clock)
        self._base_url = self.get_config_val("BASE_URL", default="https://app.ecwid.com/api/v3/", val_type="string")
        self._store_id = self.get_config_val("STORE_ID", default=None, val_type="string")
        self._access_token = self.get_config_val("ACCESS_TOKEN", default=None, val_type="string")
        self._auth_mode = helper_config.get_choice_val(self._get_config_key_name("AUTH_MODE"), choices=AUTH_MODES, default="query")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Ecwid"

    def get_store_id(self) -> str:
        return self._store_id

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default="https://app.ecwid.com/api/v3/"),
            EnvConfig(env_key="STORE_ID", val_type="string", default=None),
            EnvConfig(env_key="ACCESS_TOKEN", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._auth_mode == "header":
            return {"Authorization": f"Bearer {self._access_token}"}
        return {}

    def _get_auth_params(self) -> dict:
        # ecwid also accepts the token as the last query parameter
        if self._auth_mode == "query":
            return {"token": self._access_token}
        return {}

    def get_secret(self) -> str | None:
        return self._access_token

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return f"{self._base_url.rstrip('/')}/{self._store_id}"

    def _get_endpoint_resource(self, resource: str) -> str:
        return f"/{resource}"

    def _get_endpoint_batch(self) -> str:
        return "/batch"

    def _get_params_total(self) -> dict:
        return {"limit": 1}

    def _get_params_batch_status(self, ticket: BatchTicket) -> dict:
        return {"ticket": ticket.ticket}

    ################ PAYLOAD BUILDER ##################
    def build_page_descriptor(self, resource: str, offset: int) -> PageDescriptor:
        return PageDescriptor(
            id=self._store_id,
            path=f"/{resource}?offset={offset}",
            method="GET",
            body="",
        )

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_endpoint_total(self, response: dict) -> int:
        total = response.get("total")
        if isinstance(total, bool) or not isinstance(total, int):
            raise StoreRequestError(f"Ecwid response has no integer 'total': {response!r}")
        return total

    def _parse_endpoint_batch_submit(self, response: dict) -> BatchTicket:
        ticket = response.get("ticket")
        if not ticket:
            raise StoreRequestError(f"Ecwid batch response has no 'ticket': {response!r}")
        return BatchTicket(ticket=str(ticket))

    def _parse_endpoint_batch_status(self, response: dict, ticket: BatchTicket) -> BatchResult:
        status = response.get("status")
        if not status:
            raise StoreRequestError(f"Ecwid batch {ticket.ticket} status response has no 'status': {response!r}")
        return BatchResult(status=str(status), ticket=ticket.ticket, payload=response)
