"""Framework-free classroom workflows over the Classroom API."""
