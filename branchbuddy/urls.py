from django.urls import path

from branchbuddy import views

urlpatterns = [
    path("", views.home, name="home"),
    path("parse/", views.parse_pgn_view, name="parse_pgn"),
    path(
        "training-positions/",
        views.training_positions_view,
        name="training_positions",
    ),
]
