#!/usr/bin/env python
import os
import sys


def main():
    from config.env import settings_module_for

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module_for(os.environ.get("DJANGO_ENV")))

    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
