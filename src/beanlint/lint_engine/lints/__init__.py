from .double_entry import DOUBLE_ENTRY, find_double_entries
from .duplicate_appendix import DUPLICATE_APPENDIX_ID, find_duplicate_appendix_ids
from .duplicate_transaction import DUPLICATE_TRANSACTION, find_duplicate_transactions
from .missing_appendix import MISSING_APPENDIX, find_missing_appendices
from .missing_document import MISSING_DOCUMENT, find_missing_documents
from .nonsequential_appendix import NONSEQUENTIAL_APPENDIX, find_nonsequential_appendices
from .unbalanced_entry import UNBALANCED_ENTRY, find_unbalanced_entries

__all__ = [
    "DOUBLE_ENTRY",
    "DUPLICATE_APPENDIX_ID",
    "DUPLICATE_TRANSACTION",
    "MISSING_APPENDIX",
    "MISSING_DOCUMENT",
    "NONSEQUENTIAL_APPENDIX",
    "UNBALANCED_ENTRY",
    "find_double_entries",
    "find_duplicate_appendix_ids",
    "find_duplicate_transactions",
    "find_missing_appendices",
    "find_missing_documents",
    "find_nonsequential_appendices",
    "find_unbalanced_entries",
]
