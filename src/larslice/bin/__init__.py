"""Command line interface.

Main Components
---------------
run.py : Runs the parent reconstruction on a set of event files

Usage Examples
--------------
::

    larslice -c config/parent.yaml -s events/*.npz
    larslice -c config/parent.yaml -s events/*.npz --set parent.slicing=one_slice
"""
