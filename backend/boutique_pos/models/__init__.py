from .storage import StorageEntry
from .catalog import Category, Product
from .sales import CartItem, PaymentMethod, Transaction
from .auth import Identity
from .settings import StoreSettings

__all__ = [
    'StorageEntry',
    'Category', 'Product',
    'CartItem', 'PaymentMethod', 'Transaction',
    'Identity',
    'StoreSettings',
]
