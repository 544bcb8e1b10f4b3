from typing import Type, TypeVar, Generic, Iterable, Optional
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Thin ORM wrapper; services depend on the repository, never on the manager."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def save(self, obj: T, update_fields: Optional[Iterable[str]] = None) -> T:
        if update_fields:
            obj.save(update_fields=list(update_fields))
        else:
            obj.save()
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
