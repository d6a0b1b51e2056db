import os

import callsy.settings as settings
from callsy.core import normalizer, persistence, projector, reader, transport
from callsy.core.persistence import LineSource
from callsy.core.transport import Transport


def respond(
    request_file: str | os.PathLike,
    output_file: str | os.PathLike,
    body_output_file: str | os.PathLike | None = None,
    transport_: Transport | None = None,
    read_line: LineSource = persistence.stdin_line_source,
) -> None:
    """Run one request description through to the output files.

    Overwrite confirmation happens before the input is read, so declining
    means no network call is made.
    """
    persistence.check_output_path(output_file, read_line)
    if body_output_file is not None:
        persistence.check_output_path(body_output_file, read_line)

    spec = reader.decode_request(reader.read_request_file(request_file))
    request = normalizer.normalize(spec)
    response = transport.execute(request, transport_)
    document = projector.project(response)

    artifacts = {output_file: document.model_dump_json()}
    if body_output_file is not None:
        artifacts[body_output_file] = request.body
    persistence.write_outputs(artifacts)
    if settings.debug:
        print(f"Wrote {', '.join(str(path) for path in artifacts)}")
