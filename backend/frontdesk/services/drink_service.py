"""
Drinks catalogue service
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from frontdesk.errors import BusinessRuleError, NotFoundError
from frontdesk.models.ontology import Drink, DrinkCategory
from frontdesk.models.schemas import DrinkCreate, DrinkUpdate


class DrinkService:

    def __init__(self, db: Session):
        self.db = db

    def get_categories(self) -> List[DrinkCategory]:
        return self.db.query(DrinkCategory).order_by(DrinkCategory.name).all()

    def create_category(self, name: str) -> DrinkCategory:
        if self.db.query(DrinkCategory).filter(DrinkCategory.name == name).first():
            raise BusinessRuleError(f"Category '{name}' already exists")
        category = DrinkCategory(name=name)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def get_drinks(self, available_only: bool = False) -> List[Drink]:
        query = self.db.query(Drink)
        if available_only:
            query = query.filter(Drink.is_available == True)  # noqa: E712
        return query.order_by(Drink.name).all()

    def get_drink_or_404(self, drink_id: int) -> Drink:
        drink = self.db.query(Drink).filter(Drink.id == drink_id).first()
        if not drink:
            raise NotFoundError("Drink not found")
        return drink

    def create_drink(self, data: DrinkCreate) -> Drink:
        self._check_category(data.category_id)
        drink = Drink(**data.model_dump())
        self.db.add(drink)
        self.db.commit()
        self.db.refresh(drink)
        return drink

    def update_drink(self, drink_id: int, data: DrinkUpdate) -> Drink:
        drink = self.get_drink_or_404(drink_id)
        # only the category can be cleared with an explicit null
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if 'category_id' in data.model_fields_set:
            update_data['category_id'] = data.category_id
            self._check_category(update_data['category_id'])
        for key, value in update_data.items():
            setattr(drink, key, value)
        self.db.commit()
        self.db.refresh(drink)
        return drink

    def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is None:
            return
        if not self.db.query(DrinkCategory).filter(DrinkCategory.id == category_id).first():
            raise NotFoundError("Drink category not found")

    @staticmethod
    def get_drink_detail(drink: Drink) -> dict:
        return {
            'id': drink.id,
            'name': drink.name,
            'price': drink.price,
            'category_id': drink.category_id,
            'category_name': drink.category.name if drink.category else None,
            'is_available': drink.is_available,
        }
