"""Keyword tables for category suggestions.

A table maps a canonical category name to the keywords that hint at it.
Canonical names are matched against the household's own category names by
case-insensitive substring, so "Alimentação" also matches "Alimentação Casa".
Tables are read-only and are handed to ``CategorySuggestionService`` when it
is constructed.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

KeywordTable = Mapping[str, tuple[str, ...]]


def build_keyword_table(data: Mapping[str, Iterable[str]]) -> KeywordTable:
    """Freeze a plain mapping into a keyword table, preserving order."""
    return MappingProxyType(
        {name: tuple(str(word).lower() for word in words) for name, words in data.items()}
    )


DEFAULT_KEYWORDS: KeywordTable = build_keyword_table(
    {
        "Alimentação": [
            "mercado", "supermercado", "padaria", "restaurante", "lanchonete",
            "delivery", "ifood", "uber eats", "comida", "alimento", "feira",
            "açougue", "peixaria", "hortifruti", "pizza", "hamburguer", "café",
            "bar", "cerveja", "refrigerante",
        ],
        "Transporte": [
            "uber", "99", "taxi", "ônibus", "metrô", "combustível", "gasolina",
            "etanol", "diesel", "posto", "estacionamento", "pedágio", "mecânico",
            "oficina", "pneu", "óleo", "revisão", "seguro auto", "ipva",
            "licenciamento",
        ],
        "Moradia": [
            "aluguel", "condomínio", "iptu", "luz", "energia", "água", "gás",
            "internet", "telefone", "limpeza", "reforma", "pintura", "móveis",
            "eletrodomésticos", "decoração", "jardinagem", "segurança", "portaria",
        ],
        "Saúde": [
            "médico", "dentista", "farmácia", "remédio", "medicamento", "hospital",
            "clínica", "exame", "consulta", "plano de saúde", "convênio",
            "laboratório", "fisioterapia", "psicólogo", "oftalmologista",
            "dermatologista",
        ],
        "Educação": [
            "escola", "faculdade", "universidade", "curso", "livro",
            "material escolar", "mensalidade", "matrícula", "professor", "aula",
            "treinamento", "certificação", "idioma", "inglês", "espanhol",
            "informática",
        ],
        "Lazer": [
            "cinema", "teatro", "show", "festa", "viagem", "hotel", "pousada",
            "turismo", "parque", "clube", "academia", "esporte", "jogo",
            "streaming", "netflix", "spotify", "youtube", "livro", "revista",
        ],
        "Vestuário": [
            "roupa", "sapato", "tênis", "camisa", "calça", "vestido", "saia",
            "blusa", "casaco", "jaqueta", "underwear", "meia", "acessório",
            "bolsa", "carteira", "óculos", "relógio", "joias",
        ],
        "Serviços": [
            "cabeleireiro", "barbeiro", "manicure", "pedicure", "estética",
            "massagem", "lavanderia", "costureira", "chaveiro", "encanador",
            "eletricista", "pintor", "faxineira", "jardineiro", "veterinário",
            "pet shop",
        ],
    }
)

ENGLISH_KEYWORDS: KeywordTable = build_keyword_table(
    {
        "Food": [
            "market", "supermarket", "grocery", "bakery", "restaurant", "delivery",
            "pizza", "burger", "coffee", "cafe", "bar", "beer",
        ],
        "Transport": [
            "uber", "lyft", "taxi", "bus", "subway", "metro", "fuel", "gas station",
            "parking", "toll", "mechanic", "tire",
        ],
        "Housing": [
            "rent", "mortgage", "hoa", "electricity", "water", "internet", "phone",
            "cleaning", "furniture", "repair",
        ],
        "Health": [
            "doctor", "dentist", "pharmacy", "hospital", "clinic", "lab",
            "therapy", "insurance",
        ],
        "Education": [
            "school", "college", "university", "course", "book", "tuition", "class",
        ],
        "Leisure": [
            "cinema", "movie", "theater", "concert", "travel", "hotel", "gym",
            "netflix", "spotify", "youtube",
        ],
    }
)
