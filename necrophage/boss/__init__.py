"""Boss encounters: shared actions and narrative phases, arena movement and the individual bosses."""