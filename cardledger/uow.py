from sqlalchemy.orm import Session


class UnitOfWork:
    """Session wrapper committing on success and rolling back on error.

    Services may commit earlier on their own; whatever is still pending when
    the block exits follows the same rule.
    """

    def __init__(self, db: Session):
        self.db = db

    def __getattr__(self, attr):
        """
        Delegate attribute access to the underlying session.
        This allows the UoW to be used as if it were a Session.
        """
        return getattr(self.db, attr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            # Roll back if an exception occurred.
            self.db.rollback()
        else:
            # Otherwise, commit the transaction.
            self.db.commit()
        self.db.close()
