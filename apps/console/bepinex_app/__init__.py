"""Interactive console front end for the BepInEx installer."""
