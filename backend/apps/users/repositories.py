from apps.common.repository import GenericRepository
from .models import User, CustomerCheckoutState


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)


class CheckoutStateRepository(GenericRepository[CustomerCheckoutState]):
    def __init__(self):
        super().__init__(CustomerCheckoutState)

    def get_for(self, user_id: int, store_id: int):
        return self.model.objects.filter(user_id=user_id, store_id=store_id).first()

    def get_or_create_for(self, user_id: int, store_id: int):
        state, _ = self.model.objects.get_or_create(user_id=user_id, store_id=store_id)
        return state
