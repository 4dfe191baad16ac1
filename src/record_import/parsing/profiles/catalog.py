from __future__ import annotations

from record_import.parsing.policies import (
    CategoryAggregator,
    FieldRulesValidator,
    ImportProfile,
    ParsedField,
    RequiredField,
)
from record_import.parsing.primitives import parse_non_negative_decimal


# product catalog: one product per line, grouped by "Categoria"
CATALOG_SENTINEL = "(sem categoria)"

CATALOG_SAMPLE = (
    "Id,Nome,Categoria,Preco\n"
    "1,Caneta,Papelaria,2.5\n"
    "2,Caderno,Papelaria,15.0\n"
    "3,Mouse,Eletronicos,-10\n"
    "4,Monitor,Eletronicos,500\n"
    "5,Lapis,,1.2\n"
)


catalog_validator = FieldRulesValidator(
    rules=[
        RequiredField("Id"),
        RequiredField("Nome"),
        RequiredField("Categoria"),
        # missing -> unparseable -> negative, at most one of the three fires
        ParsedField("Preco", parse_non_negative_decimal),
    ],
)

catalog_aggregator = CategoryAggregator(field="Categoria", sentinel=CATALOG_SENTINEL)

# import
CATALOG_PROFILE = ImportProfile(
    name="catalog",
    validation=catalog_validator,
    aggregation=catalog_aggregator,
    sample_filename="produtos.csv",
    sample_text=CATALOG_SAMPLE,
)
