from dataclasses import dataclass

from finance_tracker.models import Category, TransactionType

OTHER_EXPENSE = "other-expense"
OTHER_INCOME = "other-income"

CATEGORIES: tuple[Category, ...] = (
    # Gastos
    Category(id="food", name="Comida", icon="🍽️", color="#ef4444", kind="expense"),
    Category(id="transport", name="Transporte", icon="🚗", color="#3b82f6", kind="expense"),
    Category(id="shopping", name="Compras", icon="🛍️", color="#8b5cf6", kind="expense"),
    Category(id="entertainment", name="Entretenimiento", icon="🎬", color="#f59e0b", kind="expense"),
    Category(id="health", name="Salud", icon="🏥", color="#10b981", kind="expense"),
    Category(id="education", name="Educación", icon="📚", color="#06b6d4", kind="expense"),
    Category(id="utilities", name="Servicios", icon="💡", color="#84cc16", kind="expense"),
    Category(id="rent", name="Alquiler", icon="🏠", color="#f97316", kind="expense"),
    Category(id=OTHER_EXPENSE, name="Otros Gastos", icon="💸", color="#6b7280", kind="expense"),
    # Ingresos
    Category(id="salary", name="Salario", icon="💰", color="#22c55e", kind="income"),
    Category(id="freelance", name="Freelance", icon="💻", color="#8b5cf6", kind="income"),
    Category(id="gift", name="Regalo", icon="🎁", color="#ec4899", kind="income"),
    Category(id=OTHER_INCOME, name="Otros Ingresos", icon="💵", color="#10b981", kind="income"),
    # Gastos de trabajo e inversiones
    Category(id="work", name="Trabajo", icon="💼", color="#3b82f6", kind="expense"),
    Category(id="investment", name="Inversiones", icon="📈", color="#f59e0b", kind="expense"),
)

_CATEGORIES_BY_ID = {category.id: category for category in CATEGORIES}


@dataclass(frozen=True)
class CategoryKeywords:
    category_id: str
    keywords: frozenset[str]


# Evaluated top to bottom; the first category with a matching keyword wins,
# so "bar" resolves to food before entertainment.
CATEGORY_KEYWORDS: tuple[CategoryKeywords, ...] = (
    CategoryKeywords("food", frozenset({
        "comida", "comer", "restaurante", "supermercado", "mercado", "almuerzo",
        "cena", "desayuno", "café", "bar", "pizza", "hamburguesa",
    })),
    CategoryKeywords("transport", frozenset({
        "transporte", "taxi", "uber", "metro", "autobús", "gasolina", "combustible",
        "parking", "aparcamiento", "tren", "avión",
    })),
    CategoryKeywords("shopping", frozenset({
        "compras", "ropa", "tienda", "amazon", "online", "zapatos", "vestido",
        "compré", "comprar",
    })),
    CategoryKeywords("entertainment", frozenset({
        "cine", "teatro", "concierto", "entretenimiento", "juego", "netflix",
        "spotify", "fiesta", "bar",
    })),
    CategoryKeywords("health", frozenset({
        "médico", "farmacia", "hospital", "dentista", "medicina", "salud", "doctor",
    })),
    CategoryKeywords("education", frozenset({
        "educación", "curso", "libro", "universidad", "colegio", "formación", "estudio",
    })),
    CategoryKeywords("utilities", frozenset({
        "luz", "agua", "gas", "internet", "teléfono", "electricidad", "servicios", "wifi",
    })),
    CategoryKeywords("rent", frozenset({
        "alquiler", "renta", "casa", "piso", "vivienda", "hipoteca",
    })),
    CategoryKeywords("salary", frozenset({
        "salario", "sueldo", "nómina", "trabajo", "paga",
    })),
    CategoryKeywords("freelance", frozenset({
        "freelance", "proyecto", "cliente", "trabajo independiente", "consultoría",
    })),
    CategoryKeywords("gift", frozenset({
        "regalo", "obsequio", "donación", "propina",
    })),
    CategoryKeywords("investment", frozenset({
        "inversión", "dividendos", "acciones", "bolsa", "crypto", "bitcoin",
    })),
)


def get_category_by_id(category_id: str) -> Category | None:
    return _CATEGORIES_BY_ID.get(category_id)


def category_name(category_id: str, default: str = "Desconocido") -> str:
    category = get_category_by_id(category_id)
    return category.name if category else default


def get_categories(kind: TransactionType | None = None) -> list[Category]:
    if kind is None:
        return list(CATEGORIES)
    return [category for category in CATEGORIES if category.kind == kind]


def get_expense_categories() -> list[Category]:
    return get_categories("expense")


def get_income_categories() -> list[Category]:
    return get_categories("income")


def fallback_category(transaction_type: TransactionType) -> str:
    return OTHER_INCOME if transaction_type == "income" else OTHER_EXPENSE
