from abc import ABC, abstractmethod

from billwise.models.bill import Bill
from billwise.models.recurring import RecurringTemplate
from billwise.models.transaction import Transaction
from billwise.models.user import User


class UserRepository(ABC):
    @abstractmethod
    def create(self, user: User) -> User: ...

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def list_all(self) -> list[User]: ...

    @abstractmethod
    def update(self, user: User) -> User: ...


class BillRepository(ABC):
    @abstractmethod
    def create(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def get_by_id(self, bill_id: int) -> Bill | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Bill | None: ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Bill]: ...

    @abstractmethod
    def update(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def update_status(
        self,
        bill_id: int,
        bill_status: str,
        last_paid_date: str | None,
        next_due_date: str | None,
    ) -> None: ...

    @abstractmethod
    def delete(self, bill_id: int) -> None: ...


class RecurringTemplateRepository(ABC):
    @abstractmethod
    def create(self, template: RecurringTemplate) -> RecurringTemplate: ...

    @abstractmethod
    def get_by_id(self, template_id: int) -> RecurringTemplate | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> RecurringTemplate | None: ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[RecurringTemplate]: ...

    @abstractmethod
    def list_auto_create(self, user_id: int) -> list[RecurringTemplate]: ...

    @abstractmethod
    def list_user_ids_with_auto_create(self) -> list[int]: ...

    @abstractmethod
    def update(self, template: RecurringTemplate) -> RecurringTemplate: ...

    @abstractmethod
    def set_active(self, template_id: int, active: bool) -> None: ...

    @abstractmethod
    def delete(self, template_id: int) -> None: ...


class TransactionRepository(ABC):
    @abstractmethod
    def create(self, transaction: Transaction) -> Transaction: ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Transaction]: ...

    @abstractmethod
    def list_dates_for_template(self, template_id: int) -> set[str]: ...

    @abstractmethod
    def count_instances_for_user(self, user_id: int) -> int: ...
