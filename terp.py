import sys
import os
import logging
import argparse

from enum import Enum

import pygame

from chip8.interpreter import InterpreterException,QuitException
from chip8.memory import MemoryException
from chip8.instructions import InstructionException
from chip8.rom import RomFileException

from generic_terp import ConfigException,Tracer,build_settings,load_machine,restart_machine
from pygame_terp import PygameUI,PygameSpeaker

logger = logging.getLogger('terp')

class RunState(Enum):
    RUNNING                  = 0
    PAUSED                   = 1

class Terp(object):
    """ Runs a machine at a fixed rate: a batch of instructions followed by one timer tick per frame """
    def __init__(self,machine,rom,settings):
        self.state = RunState.RUNNING
        self.machine = machine
        self.rom = rom
        self.instructions_per_tick = settings['instructions_per_tick']

    def run(self):
        if self.state != RunState.RUNNING:
            self.state = RunState.RUNNING

    def pause(self):
        if self.state != RunState.PAUSED:
            self.state = RunState.PAUSED

    def toggle_pause(self):
        if self.state == RunState.RUNNING:
            self.pause()
        else:
            self.run()

    def restart(self):
        logger.info('Restarting %s', self.rom.name)
        restart_machine(self.machine,self.rom)
        self.run()

    def idle(self):
        """ Called once per frame """
        if self.state == RunState.RUNNING:
            for i in range(0,self.instructions_per_tick):
                self.machine.tick()
            self.machine.tick_timers()

class MainLoop(object):
    def __init__(self,machine,rom,settings):
        self.machine = machine
        self.rom = rom
        self.settings = settings

    def loop(self,ui):
        terp = Terp(self.machine,self.rom,self.settings)
        terp.run()
        self.terp = terp

        clock = pygame.time.Clock()
        while ui.tick(self.machine):
            if ui.pause_requested:
                ui.pause_requested = False
                terp.toggle_pause()
                ui.show_paused(terp.state == RunState.PAUSED)
            if ui.restart_requested:
                ui.restart_requested = False
                terp.restart()
                ui.show_paused(False)

            try:
                terp.idle()
            except (InstructionException,MemoryException,InterpreterException) as e:
                raise InterpreterException('%s at PC 0x%04x [%s]' % (e,self.machine.pc,self.machine.last_instruction))
            except Exception as e:
                raise Exception('Unhandled exception "%s" at PC 0x%04x [%s]' % (e,self.machine.pc,self.machine.last_instruction),e)

            ui.draw(self.machine.framebuffer)
            clock.tick(self.settings['timer_frequency'])

        # If pygame returns False, treat as a quit
        raise QuitException()

def start(path,settings,trace_file_path=None):
    tracer = None
    if trace_file_path:
        if os.path.isdir(trace_file_path):
            raise ConfigException('Trace path must be to a file, not a directory')
        tracer = Tracer(trace_file_path)
        tracer.start()

    ui = PygameUI(settings,title=os.path.basename(path))
    try:
        machine,rom = load_machine(path,speaker=PygameSpeaker(settings))
        loop = MainLoop(machine,rom,settings)
        loop.loop(ui)
    finally:
        ui.close()
        if tracer:
            tracer.stop()

def main(*args):
    parser = argparse.ArgumentParser()
    parser.add_argument('rom',help='ROM file to run')
    parser.add_argument('--speed',help='Instructions run per 60Hz timer tick',required=False,type=int)
    parser.add_argument('--scale',help='Size in screen pixels of each CHIP-8 pixel',required=False,type=int)
    parser.add_argument('--trace_file',help='Path to file to which the terp will log every executed instruction',required=False)
    parser.add_argument('--log_level',help='Logging level (DEBUG, INFO, WARNING...)',required=False,default='WARNING')
    data = parser.parse_args(args or None)

    logging.basicConfig(level=getattr(logging,data.log_level.upper(),logging.WARNING),
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        settings = build_settings(instructions_per_tick=data.speed,scale=data.scale)
        start(data.rom,settings,trace_file_path=data.trace_file)
    except QuitException:
        print("Thanks for playing!")
    except (ConfigException,RomFileException,OSError) as e:
        print(e)
        return 1
    except InterpreterException as e:
        logger.error('%s', e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
