"""Scanner input and printable exports."""
