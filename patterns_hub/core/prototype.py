"""
Модуль prototype.py содержит паттерн Prototype: сущности, умеющие
создавать собственные глубокие копии.

Каждый тип явно объявляет, как он копируется: листовые сущности копируют
свои скалярные поля, составные сущности дополнительно вызывают clone()
у каждой дочерней сущности. Общие ссылки между оригиналом и копией не
возникают.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, TypeVar

from .exceptions import CloneNotSupportedError, EmptyValueError, NegativeValueError

T = TypeVar("T", bound="Prototype")


class Prototype(ABC):
    """
    Абстрактный базовый класс для всех копируемых сущностей.

    Класс, не реализовавший clone(), нельзя создать: проверка выполняется
    при создании экземпляра, а не при попытке копирования.

    Сущности изменяемы и сравниваются по значению (__eq__), поэтому они
    не хешируются и не могут быть ключами словаря или элементами множества.
    """

    __hash__ = None

    @abstractmethod
    def clone(self: T) -> T:
        """
        Создать независимую глубокую копию объекта.

        Returns:
            Новый объект того же типа
        """
        pass


def clone_child(child: Optional[T]) -> Optional[T]:
    """
    Скопировать дочернюю сущность.

    Args:
        child: Дочерняя сущность или None

    Returns:
        Копия сущности или None, если сущности не было

    Raises:
        CloneNotSupportedError: Если объект не поддерживает копирование или
            clone() вернул не новый объект того же типа
    """
    if child is None:
        return None

    if not isinstance(child, Prototype):
        raise CloneNotSupportedError(type(child).__name__)

    copy = child.clone()
    if copy is child or type(copy) is not type(child):
        raise CloneNotSupportedError(
            type(child).__name__, "вернул некорректный результат clone()"
        )
    return copy


def clone_children(children: Iterable[T]) -> List[T]:
    """Скопировать коллекцию сущностей в новый список того же порядка."""
    return [clone_child(child) for child in children]


def _require_name(value: str, field: str) -> str:
    if not value or not str(value).strip():
        raise EmptyValueError(field)
    return str(value).strip()


def _require_non_negative(value: int, field: str) -> int:
    if value < 0:
        raise NegativeValueError(field)
    return value


# Заказы


class Product(Prototype):
    """
    Класс Product представляет товар в заказе.

    Атрибуты:
        name: Название товара
        price: Цена за единицу
        quantity: Количество
    """

    def __init__(self, name: str, price: int, quantity: int = 1):
        self.name = _require_name(name, "Название товара")
        self.price = _require_non_negative(price, "price")
        self.quantity = _require_non_negative(quantity, "quantity")

    @property
    def total(self) -> int:
        """Стоимость позиции (цена * количество)."""
        return self.price * self.quantity

    def clone(self) -> "Product":
        return Product(self.name, self.price, self.quantity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return (self.name, self.price, self.quantity) == (
            other.name,
            other.price,
            other.quantity,
        )

    def __repr__(self) -> str:
        return f"Product({self.name!r}, price={self.price}, quantity={self.quantity})"


class Order(Prototype):
    """
    Класс Order представляет заказ со списком товаров.

    Атрибуты:
        _products: Упорядоченный список товаров
        delivery_cost: Стоимость доставки
        payment_method: Способ оплаты
    """

    def __init__(
        self,
        products: Optional[Iterable[Product]] = None,
        delivery_cost: int = 0,
        payment_method: Optional[str] = None,
    ):
        self._products: List[Product] = list(products or [])
        self._delivery_cost = 0
        self.delivery_cost = delivery_cost  # Используем сеттер для валидации
        self.payment_method = payment_method

    @property
    def products(self) -> List[Product]:
        """Список товаров заказа."""
        return self._products

    @property
    def delivery_cost(self) -> int:
        """Стоимость доставки."""
        return self._delivery_cost

    @delivery_cost.setter
    def delivery_cost(self, value: int):
        self._delivery_cost = _require_non_negative(value, "delivery_cost")

    def add_product(self, product: Product) -> None:
        """Добавить товар в заказ."""
        self._products.append(product)

    @property
    def total(self) -> int:
        """Итоговая сумма заказа с доставкой."""
        return sum(product.total for product in self._products) + self._delivery_cost

    def clone(self) -> "Order":
        return Order(
            products=clone_children(self._products),
            delivery_cost=self._delivery_cost,
            payment_method=self.payment_method,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self._products == other._products
            and self._delivery_cost == other._delivery_cost
            and self.payment_method == other.payment_method
        )

    def __repr__(self) -> str:
        return (
            f"Order(products={self._products!r}, "
            f"delivery_cost={self._delivery_cost}, "
            f"payment_method={self.payment_method!r})"
        )


# Игровые персонажи


class Weapon(Prototype):
    """Оружие персонажа."""

    def __init__(self, name: str, damage: int):
        self.name = _require_name(name, "Название оружия")
        self.damage = damage

    def clone(self) -> "Weapon":
        return Weapon(self.name, self.damage)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Weapon):
            return NotImplemented
        return (self.name, self.damage) == (other.name, other.damage)

    def __str__(self) -> str:
        return f"{self.name}({self.damage})"

    def __repr__(self) -> str:
        return f"Weapon({self.name!r}, damage={self.damage})"


class Armor(Prototype):
    """Броня персонажа."""

    def __init__(self, name: str, defense: int):
        self.name = _require_name(name, "Название брони")
        self.defense = defense

    def clone(self) -> "Armor":
        return Armor(self.name, self.defense)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Armor):
            return NotImplemented
        return (self.name, self.defense) == (other.name, other.defense)

    def __str__(self) -> str:
        return f"{self.name}({self.defense})"

    def __repr__(self) -> str:
        return f"Armor({self.name!r}, defense={self.defense})"


class Skill(Prototype):
    """Способность персонажа (например, "Огненный шар", тип MAGIC)."""

    def __init__(self, name: str, skill_type: str, level: int = 1):
        self.name = _require_name(name, "Название способности")
        self.skill_type = skill_type
        self.level = level

    def clone(self) -> "Skill":
        return Skill(self.name, self.skill_type, self.level)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Skill):
            return NotImplemented
        return (self.name, self.skill_type, self.level) == (
            other.name,
            other.skill_type,
            other.level,
        )

    def __str__(self) -> str:
        return f"{self.name}({self.level})"

    def __repr__(self) -> str:
        return f"Skill({self.name!r}, {self.skill_type!r}, level={self.level})"


class Character(Prototype):
    """
    Класс Character представляет игрового персонажа со снаряжением.

    Атрибуты:
        name: Имя персонажа
        health, strength, agility, intelligence: Характеристики
        weapon: Оружие (может отсутствовать)
        armor: Броня (может отсутствовать)
        _skills: Упорядоченный список способностей
    """

    def __init__(
        self,
        name: str,
        health: int,
        strength: int,
        agility: int,
        intelligence: int,
        weapon: Optional[Weapon] = None,
        armor: Optional[Armor] = None,
        skills: Optional[Iterable[Skill]] = None,
    ):
        self.name = _require_name(name, "Имя персонажа")
        self.health = health
        self.strength = strength
        self.agility = agility
        self.intelligence = intelligence
        self.weapon = weapon
        self.armor = armor
        self._skills: List[Skill] = list(skills or [])

    @property
    def skills(self) -> List[Skill]:
        """Список способностей персонажа."""
        return self._skills

    def add_skill(self, skill: Skill) -> None:
        """Добавить способность."""
        self._skills.append(skill)

    def clone(self) -> "Character":
        return Character(
            self.name,
            self.health,
            self.strength,
            self.agility,
            self.intelligence,
            weapon=clone_child(self.weapon),
            armor=clone_child(self.armor),
            skills=clone_children(self._skills),
        )

    def deep_clone(self) -> "Character":
        """Синоним clone()."""
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Character):
            return NotImplemented
        return (
            self.name,
            self.health,
            self.strength,
            self.agility,
            self.intelligence,
            self.weapon,
            self.armor,
            self._skills,
        ) == (
            other.name,
            other.health,
            other.strength,
            other.agility,
            other.intelligence,
            other.weapon,
            other.armor,
            other._skills,
        )

    def __str__(self) -> str:
        skills = ", ".join(str(skill) for skill in self._skills)
        return f"{self.name} | Оружие: {self.weapon} | Способности: [{skills}]"

    def __repr__(self) -> str:
        return (
            f"Character({self.name!r}, health={self.health}, "
            f"weapon={self.weapon!r}, armor={self.armor!r}, "
            f"skills={self._skills!r})"
        )
