# itools

A small scripting workbench. It keeps a workspace of script files, renders
them with line-based syntax highlighting, runs the selected text (or the whole
script) through a language plugin and collects the timestamped output as HTML.
It can also read a release manifest, tell whether a newer version exists,
download it and hand over to an updater program.

There are no third-party dependencies.

## Install

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Command line

    itools [FILES ...] [--run] [--update-endpoint URL]

- `FILES` are added to the workspace. The first one becomes the active file
  and is loaded into the editor.
- `--run` runs the active file through the first loaded plugin and prints the
  output panel's HTML.
- `--update-endpoint URL` fetches the update manifest from `URL`. If a newer
  version is listed, the release notes are printed and you are asked
  `Update now? [y/N]`. Answering yes downloads the release archive and starts
  `updater.exe` from the program's directory, then exits.

While it runs, the working directory is the user's home directory. At the end
the latest status message (for example `Ready.` or `Completed!`) is printed.

Opening a file for editing makes it the auto-save target: after highlighting,
the text is written back to the file as UTF-8 (it is read as Latin-1).

## Library use

### Highlighting — `itools.highlighter`

- `convert_text_to_html(line)` renders one line as an HTML paragraph. Comments
  (`#...` at the start) are grey, known commands (`echo`, `ls`, `ps`,
  `Write-Output`, `Get-ChildItem`, `Connect-SPOService`, `Get-SPOsite`,
  `Set-SPOUser`, `Install-Module`, any case) are orange, `$name = ...`
  assignments have the variable in blue, a right-hand side that holds a
  double-quoted string is green, and any other non-empty line gets a wavy
  green underline. Empty lines and a single space give `<p> </p>`.
- `convert_rhs_text_to_html(text)` colours text that holds a string literal.
- `document_to_html(text)` renders a whole script inside `<pre>...</pre>`;
  empty text gives an empty string.

```python
from itools.highlighter import convert_text_to_html

print(convert_text_to_html('echo "hello"'))
# <p><span style='color:#FFB76B'>echo</span><span style='color:#3eb489'> "hello"</span></p>
```

### Editor — `itools.editor`

`Editor(on_status=None)` is an in-memory text buffer with a cursor and a
selection: `set_plain_text`, `to_plain_text`, `select(start, end)`,
`selected_text()` (line breaks given as U+2029), `move_cursor(position)`,
`open_and_parse_file(file_path, read_only=True)`, `key_press()`,
`key_release(key_text)`, `auto_save()` and `highlighted_html()`. Status
messages go to `on_status(message, timeout)`.

Each cursor or selection change updates `Editor.state`, an `EditorState`, and
calls every function in `Editor.state_listeners`. `line_number_rows(state,
height)` turns that state into gutter rows of `(line number, top y,
LineMark)`, where `LineMark` is `NONE`, `SELECTED` or `CURRENT`.

### Plugins — `itools.plugins`

A plugin subclasses `Plugin`, providing a `name` property and
`perform_action(command)`, which returns a `ProcessedData`. Plugins are
registered by name in an `AppContext` as a `PluginFactory(create,
destroy=None)`.

`PluginManager(context)` loads plugins by name (`load_plugin`, raising
`PluginLoadError` on failure), forwards `call_perform_action(command)` to the
first loaded plugin, and `unload_all_plugins()` shuts them down newest first.
It is also a context manager. `load_plugins_from_directory(path)` loads the
registered plugins whose names match a library file (`.dll`, `.dylib` or
`.so`, by platform) in that directory.

```python
from itools.plugins import AppContext, Plugin, PluginFactory, PluginManager, ProcessedData


class Echo(Plugin):
    @property
    def name(self):
        return "echo"

    def perform_action(self, command):
        return ProcessedData(result_value=str(command))


context = AppContext(plugins={"echo": PluginFactory(create=lambda ctx: Echo())})
with PluginManager(context) as manager:
    manager.load_plugin("echo")
    print(manager.call_perform_action("hi").result_value)  # hi
```

### Running scripts — `itools.runner`

`CodeRunner(editor, plugin_manager, on_status=None, on_result=None)` runs the
editor's selection, or its whole text, through the first plugin on a worker
thread. `run_code()` returns False when a run is already in progress;
`wait(timeout=None)` and `is_running()` follow the run. Results reach
`on_result(exit_code, output, error)`. `interpret_result(value)` gives the
`RunResult`: text that mentions "exception" counts as an error, and anything
that is not text is reported as `Error failed to execute task.`

### Output — `itools.output`

`OutputDisplay` collects runs with `log(output, error, now=None)` as a
timestamped HTML block; `html()` returns all of them. `show`, `hide` and
`toggle` change `visible`.

### Workspace — `itools.workspace`

`Workspace(editor=None, store=None)` holds `FileEntry` items. `add_file(path)`
records the file in the store and makes it active; `activate(entry)` opens it
in the editor for writing; `active` is the current entry. A store provides
`insert_file`, `find_previously_opened_files` and `delete_file`; without one,
files are kept in memory only. `file_name_of(path)` is the part after the
last `/`. `itools.fileobject.FileObject` is the stored record.

### Updates — `itools.versioning`

`VersionRepository(endpoint, work_dir=None)` downloads the JSON manifest
(`latestVersion`, `downloadUrl`, `releaseNotes`) with `fetch_manifest()`,
`check_for_updates()` returns an `UpdateInfo` only when a newer version is
listed, and `download_new_version()` saves `it-tools-<version>.zip` in the
work directory (by default `ITools` in the temporary directory). Helpers:
`parse_manifest`, `split_version`, `current_app_version`, `is_newer` and
`format_release_notes`.

### Application — `itools.app`

`App(context=None, plugin_manager=None)` wires the editor, workspace, output
panel and runner together and keeps a `status_log`. `configure_app_context`,
`build_updater_command` and `launch_updater_and_exit` prepare the plugin
context and the updater hand-over.

## What it does not do

- There is no graphical window; the editor, drawer and output panel are
  in-memory objects, and the command line is the only front end.
- No plugin is bundled, and plugins are Python objects registered in an
  `AppContext`, not native libraries. Out of the box `--run` has no plugin to
  run with and reports a failed task.
- The list of opened files is not kept between runs unless you pass a
  `Workspace` a store of your own.