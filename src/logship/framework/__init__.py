"""Framework services shared by every logship component."""
