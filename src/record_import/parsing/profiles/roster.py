from __future__ import annotations

from record_import.parsing.policies import CategoryAggregator, FieldRulesValidator, ImportProfile, RequiredField


# class roster: one student per line, grouped by class ("Turma")
ROSTER_SENTINEL = "(sem turma)"

ROSTER_SAMPLE = "Id,Nome,Turma\n1,Ana,101\n2,Bruno,101\n3,Carla,102\n4,,102\n5,Diego,\n"


roster_validator = FieldRulesValidator(
    rules=[
        RequiredField("Id"),
        RequiredField("Nome"),
        RequiredField("Turma"),
    ],
)

roster_aggregator = CategoryAggregator(field="Turma", sentinel=ROSTER_SENTINEL)

# import
ROSTER_PROFILE = ImportProfile(
    name="roster",
    validation=roster_validator,
    aggregation=roster_aggregator,
    sample_filename="alunos.csv",
    sample_text=ROSTER_SAMPLE,
)
