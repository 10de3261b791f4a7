from django.apps import AppConfig


class BranchBuddyConfig(AppConfig):
    name = "branchbuddy"
    verbose_name = "Branch Buddy"
