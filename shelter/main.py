import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from shelter.api.base import BaseRecordsClient
from shelter.api.exceptions import CollaboratorError
from shelter.api.factory import RecordsClientFactory
from shelter.config.settings import Settings
from shelter.entities import EntityType
from shelter.interchange.exceptions import MalformedDocumentError
from shelter.logging.logger import Log
from shelter.processor.exceptions import ProcessorError
from shelter.processor.pipeline import PipelineContext
from shelter.processor.processor import build_export_processor, build_import_processor
from shelter.processor.status_service import build_status_service
from shelter.workflow.definitions import workflow_for
from shelter.workflow.exceptions import WorkflowError
from shelter.workflow.serialization import stateful_record_from_payload
from shelter.workflow.stats import count_by_status

ENTITY_CHOICES = [entity.value for entity in EntityType]
WORKFLOW_ENTITY_CHOICES = [
    EntityType.ADOPTION_INQUIRIES.value,
    EntityType.VOLUNTEERS.value,
]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Bulk CSV import/export and status workflow for the shelter admin API",
        epilog="""
Examples:
  # Import animals from a spreadsheet export
  python -m shelter.main import animals animals.csv

  # Export approved adoption inquiries into EXPORT_DIR
  python -m shelter.main export adoption_inquiries --status Approved

  # Move an inquiry to Under Review with a note
  python -m shelter.main transition adoption_inquiries 64f0c2 "Under Review" --notes "Called applicant"
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Create records from a CSV file")
    import_cmd.add_argument("entity", choices=ENTITY_CHOICES)
    import_cmd.add_argument("path", type=Path, help="CSV file with a header row")

    export_cmd = commands.add_parser("export", help="Write records to <entity>_export_<date>.csv")
    export_cmd.add_argument("entity", choices=ENTITY_CHOICES)
    export_cmd.add_argument("--status", help="Only export records at this status (All = no filter)")
    export_cmd.add_argument("--output-dir", type=Path, help="Directory for the export (default: EXPORT_DIR)")

    transition_cmd = commands.add_parser("transition", help="Change a record's status")
    transition_cmd.add_argument("entity", choices=WORKFLOW_ENTITY_CHOICES)
    transition_cmd.add_argument("record_id")
    transition_cmd.add_argument("status")
    transition_cmd.add_argument("--notes", help="Note stored in the status history")
    transition_cmd.add_argument("--actor", help="Who made the change (default: DEFAULT_ACTOR)")

    stats_cmd = commands.add_parser("stats", help="Count records per status")
    stats_cmd.add_argument("entity", choices=WORKFLOW_ENTITY_CHOICES)

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> build client -> run command."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    client = RecordsClientFactory.create(settings)
    try:
        return _dispatch(args, settings, client)
    except (MalformedDocumentError, ProcessorError, WorkflowError, CollaboratorError) as exc:
        Log.error(f"{args.command} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        client.close()


def _dispatch(args: argparse.Namespace, settings: Settings, client: BaseRecordsClient) -> int:
    entity = EntityType(args.entity)
    if args.command == "import":
        context = build_import_processor(client).run(
            PipelineContext(entity=entity, source_path=args.path)
        )
        decode_result = context.decode_result
        if decode_result is not None:
            for error in decode_result.row_errors:
                print(f"Row {error.row_index}: {error.reason}")
        if context.tally is not None:
            print(context.tally.summary())
        return 0

    if args.command == "export":
        context = build_export_processor(settings, client, args.output_dir).run(
            PipelineContext(entity=entity, status_filter=args.status)
        )
        print(context.export_path)
        return 0

    if args.command == "transition":
        service = build_status_service(client)
        record = service.load_record(entity, args.record_id)
        updated = service.update_status(
            entity,
            record,
            args.status,
            actor=args.actor or settings.default_actor,
            notes=args.notes,
        )
        print(f"{entity.value} {updated.id}: {record.status} -> {updated.status}")
        return 0

    workflow = workflow_for(entity)
    records = [
        stateful_record_from_payload(payload, workflow)
        for payload in client.fetch_records(entity)
    ]
    for status, count in count_by_status(records, workflow).items():
        print(f"{status}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
