from django.urls import path
from .views import (
    health,
    start_game,
    submit_guess,
    list_games,
    player_games,
    players,
    player_detail,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('start-game', start_game, name='start-game'),
    path('guess', submit_guess, name='guess'),
    path('games', list_games, name='games'),
    path('players', players, name='players'),
    path('players/<int:player_id>', player_detail, name='player-detail'),
    path('players/<int:player_id>/games', player_games, name='player-games'),
]
