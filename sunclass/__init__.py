"""sunclass: classroom workflow layer over the Classroom API."""
