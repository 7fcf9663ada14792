"""Search Clients Use Case"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import ClientDTO, SearchClientsResponseDTO

MIN_TERM_LENGTH = 2
MAX_RESULTS = 10


class SearchClients:
    """
    Search Clients Use Case

    Finds distinct clients (by email) among the user's invoices whose name
    or email contains the term. Terms shorter than two characters return
    no clients.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, user_id: str, term: str) -> Result[SearchClientsResponseDTO]:
        term = (term or "").strip()
        if len(term) < MIN_TERM_LENGTH:
            return Return.ok(SearchClientsResponseDTO(clients=[]))

        invoices = await self.invoice_repo.search_clients(user_id, term, limit=MAX_RESULTS)

        return Return.ok(
            SearchClientsResponseDTO(
                clients=[
                    ClientDTO(
                        client_name=invoice.client_name,
                        client_email=invoice.client_email,
                        client_address=invoice.client_address,
                    )
                    for invoice in invoices
                ]
            )
        )
