from .transactions import TransactionDatabase, FrameDatabase, frame_to_transactions

__all__ = [
    'TransactionDatabase', 'FrameDatabase', 'frame_to_transactions'
]
