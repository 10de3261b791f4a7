import json

from django.http import JsonResponse
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from branchbuddy import conf, util
from branchbuddy.decorators import pgn_errors_as_json
from branchbuddy.flattener import Variation
from branchbuddy.service import parse_pgn
from branchbuddy.training import create_training_positions


def error_response(message, error="bad_request", status=400):
    return JsonResponse(
        {"status": "error", "error": error, "message": message}, status=status
    )


@require_GET
def home(request):
    return JsonResponse(
        {
            "name": "Branch Buddy",
            "endpoints": {
                "parse": reverse("parse_pgn"),
                "training_positions": reverse("training_positions"),
            },
        }
    )


def get_deck_name(requested, file_name=""):
    if requested := (requested or "").strip():
        return requested
    if file_name:
        return file_name.removesuffix(".pgn")
    return conf.get_default_deck_name()


@require_POST
@pgn_errors_as_json()
def parse_pgn_view(request):
    file_name = ""
    if file := request.FILES.get("uploaded_file"):
        try:
            pgn_text = file.read().decode("utf-8")
        except UnicodeDecodeError:
            return error_response("Not a valid UTF-8 PGN file", error="bad_upload")
        file_name = file.name
    else:
        pgn_text = request.POST.get("pgn", "")

    if not pgn_text.strip():
        return error_response("No PGN provided", error="no_pgn")

    deck_name = get_deck_name(request.POST.get("deck_name"), file_name)

    config = conf.ParserConfig.from_settings()
    # both the site and the request have to want it
    wants_fallback = request.POST.get("fallback", "").lower() == "true"
    result = parse_pgn(
        pgn_text, config=config, allow_fallback=wants_fallback and config.allow_fallback
    )

    status = "success" if result.validated else "unvalidated"
    return JsonResponse({"status": status, "deck_name": deck_name, **result.to_dict()})


@require_POST
@pgn_errors_as_json()
def training_positions_view(request):
    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return error_response("Not valid JSON")
    if not isinstance(data, dict):
        return error_response("Expected a JSON object")

    moves = data.get("moves")
    color = data.get("color", "")
    if not isinstance(moves, list) or not all(isinstance(m, str) for m in moves):
        return error_response("moves must be a list of SAN strings")
    if not isinstance(color, str) or color.strip().lower() not in util.COLORS:
        return error_response("Color must be set as 'white' or 'black'")

    variation = Variation(
        id=str(data.get("variation_id") or "main"),
        display_name=data.get("name", ""),
        moves=moves,
        is_mainline=bool(data.get("mainline", False)),
    )
    positions = create_training_positions(variation, color)

    return JsonResponse(
        {
            "status": "success",
            "variation_id": variation.id,
            "positions": [p.to_dict() for p in positions],
        }
    )
