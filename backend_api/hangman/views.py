from __future__ import annotations

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from . import services
from .engine import GameError, GameResult
from .serializers import (
    GameRecordSerializer,
    GameViewSerializer,
    GuessRequestSerializer,
    PlayerSerializer,
    StartGameRequestSerializer,
)

ERROR_STATUS = {
    GameError.PLAYER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    GameError.NO_ACTIVE_SESSION: status.HTTP_404_NOT_FOUND,
    GameError.WORD_POOL_EXHAUSTED: status.HTTP_409_CONFLICT,
}

ERROR_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "error": openapi.Schema(type=openapi.TYPE_STRING),
        "code": openapi.Schema(type=openapi.TYPE_STRING),
    },
)


def _result_response(result: GameResult) -> Response:
    """Map an engine result to an HTTP response."""
    if not result.ok:
        return Response(
            {"error": result.message, "code": result.error.value},
            status=ERROR_STATUS[result.error],
        )
    return Response(GameViewSerializer(GameViewSerializer.from_view(result.view)).data, status=status.HTTP_200_OK)


def _player_not_found() -> Response:
    return Response(
        {"error": "Player not found.", "code": GameError.PLAYER_NOT_FOUND.value},
        status=status.HTTP_404_NOT_FOUND,
    )


def _records_response(records) -> Response:
    data = [GameRecordSerializer.from_record(r) for r in records]
    return Response(GameRecordSerializer(data, many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="start_game",
    operation_summary="Start a game",
    operation_description="""
Start a game for the player on a random unused word. Starting again on a
word the player already has in progress returns that game unchanged.

Request body:
- player_id (int, required)

Response:
- hidden_word, attempted_letters, remaining_attempts, is_complete, score, status
""",
    request_body=StartGameRequestSerializer,
    responses={200: GameViewSerializer, 404: ERROR_SCHEMA, 409: ERROR_SCHEMA},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def start_game(request):
    """Start a game for a player.

    Returns 404 for an unknown player and 409 once every word has been used.
    """
    serializer = StartGameRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    result = services.start_game(serializer.validated_data["player_id"])
    return _result_response(result)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="submit_guess",
    operation_summary="Guess a letter",
    operation_description="""
Guess one letter in the player's most recently started game. Repeating a
letter changes nothing. When the word is revealed or the last life is lost
the game is archived and the final state is returned.

Request body:
- player_id (int, required)
- letter (string, exactly one character)
""",
    request_body=GuessRequestSerializer,
    responses={200: GameViewSerializer, 404: ERROR_SCHEMA},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def submit_guess(request):
    """Guess a letter in the player's latest game."""
    serializer = GuessRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data
    result = services.submit_guess(vd["player_id"], vd["letter"])
    return _result_response(result)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="list_games",
    operation_summary="List finished games",
    operation_description="All finished games, newest first.",
    responses={200: GameRecordSerializer(many=True)},
    tags=["history"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def list_games(request):
    """List every finished game."""
    return _records_response(services.all_games())


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="player_games",
    operation_summary="List a player's finished games",
    operation_description="""
Finished games of one player, newest first.

Path parameters:
- player_id (int): Player identifier.
""",
    responses={200: GameRecordSerializer(many=True), 404: ERROR_SCHEMA},
    tags=["history"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def player_games(request, player_id: int):
    """List finished games for a single player."""
    if services.find_player(player_id) is None:
        return _player_not_found()
    return _records_response(services.games_for_player(player_id))


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="create_player",
    operation_summary="Register a player",
    request_body=PlayerSerializer,
    responses={201: PlayerSerializer},
    tags=["players"],
)
@swagger_auto_schema(
    method="get",
    operation_id="list_players",
    operation_summary="List players",
    responses={200: PlayerSerializer(many=True)},
    tags=["players"],
)
@api_view(["GET", "POST"])
@permission_classes([permissions.AllowAny])
def players(request):
    """List players or register a new one."""
    if request.method == "POST":
        serializer = PlayerSerializer(data=request.data or {})
        serializer.is_valid(raise_exception=True)
        player = services.register_player(serializer.validated_data["name"])
        return Response(PlayerSerializer(player).data, status=status.HTTP_201_CREATED)

    return Response(PlayerSerializer(services.list_players(), many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="player_detail",
    operation_summary="Get a player",
    responses={200: PlayerSerializer, 404: ERROR_SCHEMA},
    tags=["players"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def player_detail(request, player_id: int):
    """Retrieve a player by ID."""
    player = services.find_player(player_id)
    if player is None:
        return _player_not_found()
    return Response(PlayerSerializer(player).data, status=status.HTTP_200_OK)
