import json
from abc import abstractmethod

from shared.clients.ClientInterface import ClientInterface
from shared.clients.models.RequestResult import RequestResult
from shared.clients.store.models.Batch import BatchResult, BatchTicket, PageDescriptor
from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig


class StoreRequestError(Exception):
    """A store request failed or returned a body without the expected field."""

    def __init__(self, message: str, result: RequestResult | None = None):
        super().__init__(message)
        self.result = result


class StoreClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig, clock: HelperClock | None = None):
        super().__init__(helper_config=helper_config, clock=clock)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "store"
        """
        return "store"

    @abstractmethod
    def get_store_id(self) -> str:
        """
        Returns the identifier of the store all requests go to.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_resource(self, resource: str) -> str:
        """
        Returns the endpoint path for listing a resource.

        Args:
            resource (str): The requested API method, e.g. "products".

        Returns:
            str: The endpoint path (e.g. "/products")
        """
        pass

    @abstractmethod
    def _get_endpoint_batch(self) -> str:
        """
        Returns the endpoint path used both to submit a batch and to poll its status.

        Returns:
            str: The endpoint path (e.g. "/batch")
        """
        pass

    @abstractmethod
    def _get_params_total(self) -> dict:
        """
        Returns the query parameters of the smallest listing request that still reports the total.
        """
        pass

    @abstractmethod
    def _get_params_batch_status(self, ticket: BatchTicket) -> dict:
        """
        Returns the query parameters of a batch status request.
        """
        pass

    ################ PAYLOAD BUILDER ##################
    @abstractmethod
    def build_page_descriptor(self, resource: str, offset: int) -> PageDescriptor:
        """Build the sub-request fetching one page of ``resource`` starting at ``offset``.

        Args:
            resource (str): The requested API method.
            offset (int): Index of the first item of the page.

        Returns:
            PageDescriptor: The sub-request.
        """
        pass

    def get_batch_payload(self, pages: list[PageDescriptor]) -> str:
        """Serialize the sub-requests of one batch into the request body.

        Args:
            pages (list[PageDescriptor]): Sub-requests in submission order.

        Returns:
            str: JSON text.
        """
        return json.dumps([page.model_dump() for page in pages])

    ##########################################
    ############### REQUESTS #################
    ##########################################

    def _require(self, result: RequestResult, action: str) -> dict:
        """Return the JSON object of a successful result or raise with the failure reason."""
        if not result.ok:
            raise StoreRequestError(f"{action} failed on {self._get_engine_name()}: {result.error}", result=result)
        if not isinstance(result.data, dict):
            raise StoreRequestError(f"{action} returned an unexpected body on {self._get_engine_name()}: {result.data!r}", result=result)
        return result.data

    async def do_fetch_total(self, resource: str) -> int:
        """
        Fetches the total number of items of a resource.

        Args:
            resource (str): The requested API method.

        Returns:
            int: The total item count reported by the store.

        Raises:
            StoreRequestError: If the request fails or the response carries no total.
        """
        result = await self.do_request(method="GET", endpoint=self._get_endpoint_resource(resource), params=self._get_params_total())
        data = self._require(result, f"Counting '{resource}'")
        return self._parse_endpoint_total(data)

    async def do_submit_batch(self, pages: list[PageDescriptor]) -> BatchTicket:
        """
        Submits one batch of page requests.

        Args:
            pages (list[PageDescriptor]): The sub-requests of the batch.

        Returns:
            BatchTicket: The ticket to poll.

        Raises:
            StoreRequestError: If the request fails or the response carries no ticket.
        """
        result = await self.do_request(method="POST", endpoint=self._get_endpoint_batch(), content=self.get_batch_payload(pages))
        data = self._require(result, "Submitting a batch")
        return self._parse_endpoint_batch_submit(data)

    async def do_fetch_batch_status(self, ticket: BatchTicket) -> BatchResult:
        """
        Fetches the current status of a submitted batch.

        Args:
            ticket (BatchTicket): The ticket returned on submission.

        Returns:
            BatchResult: The status and, once completed, the responses of all sub-requests.

        Raises:
            StoreRequestError: If the request fails or the response carries no status.
        """
        result = await self.do_request(method="GET", endpoint=self._get_endpoint_batch(), params=self._get_params_batch_status(ticket))
        data = self._require(result, f"Polling batch {ticket.ticket}")
        return self._parse_endpoint_batch_status(data, ticket)

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_endpoint_total(self, response: dict) -> int:
        """
        Extracts the total item count from a listing response.

        Raises:
            StoreRequestError: If the count is missing or not an integer.
        """
        pass

    @abstractmethod
    def _parse_endpoint_batch_submit(self, response: dict) -> BatchTicket:
        """
        Extracts the ticket from a batch submission response.

        Raises:
            StoreRequestError: If the ticket is missing.
        """
        pass

    @abstractmethod
    def _parse_endpoint_batch_status(self, response: dict, ticket: BatchTicket) -> BatchResult:
        """
        Parses a batch status response.

        Raises:
            StoreRequestError: If the status is missing.
        """
        pass
