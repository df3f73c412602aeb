from models.repositories import (
    SQLAuthorRepository,
    SQLAuthorshipRepository,
    SQLBookRepository,
    SQLContractRepository,
    SQLPrintingCompanyRepository,
    SQLPrintingJobRepository,
    SQLPublisherRepository,
)
from services.author_service import AuthorService
from services.book_service import BookService
from services.printing_service import PrintingService
from services.publisher_service import PublisherService
from services.reporting_service import ReportingService


class ServiceRegistry:
    """Wires the SQL repositories of one DBStorage into every service."""

    def __init__(self, storage):
        self.storage = storage

        publishers = SQLPublisherRepository(storage)
        authors = SQLAuthorRepository(storage)
        books = SQLBookRepository(storage)
        authorships = SQLAuthorshipRepository(storage)
        companies = SQLPrintingCompanyRepository(storage)
        contracts = SQLContractRepository(storage)
        printing_jobs = SQLPrintingJobRepository(storage)

        self.books = BookService(storage, books, authors, publishers, authorships, printing_jobs)
        self.authors = AuthorService(storage, authors, authorships)
        self.publishers = PublisherService(storage, publishers, books)
        self.printing = PrintingService(storage, companies, contracts, printing_jobs, books)
        self.reporting = ReportingService(storage, printing_jobs, contracts)
