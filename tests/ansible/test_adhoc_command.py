from clustercli.ansible.command import AdhocCommand, NamedModule, RawCommand
from clustercli.ansible.params import decode_parameters

INVENTORY = "/tmp/inventory.yaml"


def test_named_command_argv_shape():
    argv = AdhocCommand.named("ping").arguments(INVENTORY)
    assert argv == ["--inventory", INVENTORY, "-m", "ping", "all"]


def test_become_adds_both_flags_before_module():
    argv = AdhocCommand.named("reboot", needs_become=True).arguments(INVENTORY)
    assert argv == ["--inventory", INVENTORY, "-K", "-b", "-m", "reboot", "all"]


def test_verbosity_flag_leads_the_argv():
    argv = AdhocCommand.named("ping", host_pattern="workers").arguments(INVENTORY, verbose=7)
    assert argv[0] == "-vvvv"
    assert argv[-1] == "workers"


def test_run_uptime_uses_command_module():
    cmd = AdhocCommand.run("uptime")
    assert cmd.module == RawCommand("uptime")
    argv = cmd.arguments(INVENTORY)
    assert argv == ["--inventory", INVENTORY, "-m", "command", "-a", "uptime", "all"]
    assert "-K" not in argv and "-b" not in argv


def test_run_with_chdir_and_become():
    argv = AdhocCommand.run("ls -la", needs_become=True, chdir="/var/log").arguments(INVENTORY)
    assert argv[argv.index("-a") + 1] == 'ls -la chdir="/var/log"'
    assert argv[2:4] == ["-K", "-b"]


def test_copy_command_parameters():
    cmd = AdhocCommand.copy("/tmp/a", "/tmp/b")
    argv = cmd.arguments(INVENTORY)
    assert argv[argv.index("-m") + 1] == "copy"
    assert argv[argv.index("-a") + 1] == 'src="/tmp/a" dest="/tmp/b"'


def test_fetch_command_module():
    cmd = AdhocCommand.fetch("/etc/hostname", "/tmp/out")
    assert cmd.module == NamedModule("fetch")
    assert cmd.parameters == {"src": "/etc/hostname", "dest": "/tmp/out"}


def test_update_command_parameters_and_privilege():
    cmd = AdhocCommand.update()
    argv = cmd.arguments(INVENTORY)
    assert cmd.needs_become
    assert argv[argv.index("-m") + 1] == "apt"
    assert decode_parameters(argv[argv.index("-a") + 1]) == {
        "update_cache": "yes",
        "autoremove": "yes",
        "force_apt_get": "yes",
        "upgrade": "yes",
    }


def test_commands_with_parameters_are_correctly_built():
    for optional in (None, "", "value"):
        for become in (False, True):
            cmd = (
                AdhocCommand.named("my_command", become)
                .with_parameter("param1", "param1_value")
                .with_parameter("param2", "param2_value")
                .with_optional_parameter("opt_param1", optional)
            )
            assert cmd.module_name == "my_command"
            assert cmd.needs_become is become
            assert cmd.parameters["param1"] == "param1_value"
            assert cmd.parameters["param2"] == "param2_value"
            if optional is None:
                assert "opt_param1" not in cmd.parameters
            else:
                assert cmd.parameters["opt_param1"] == optional


def test_argv_is_deterministic():
    build = lambda: AdhocCommand.copy("a b", 'c"d', host_pattern="web").arguments(INVENTORY, 2)
    assert build() == build()
