"""A resource package used to exercise the loader outside the fos_user resources."""
